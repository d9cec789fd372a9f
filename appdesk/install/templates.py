"""
Literal text templates of the generated files and the placeholder substitution.

Placeholders are written as ``%Name%`` and replaced literally, in order.
"""

import textwrap

DESKTOP_FILE = textwrap.dedent("""\
    [Desktop Entry]
    Type=Application
    Name=%AppName%
    StartupWMClass=%AppClass%
    Comment=%AppDescription%
    Exec="%EscapedAppPath%"
    NoDisplay=false
    Terminal=false
    Categories=%Category%;
    Icon=%IconPath%
    Path=%FolderPath%""")

UNINSTALL_FILE = textwrap.dedent('''\
    #!/usr/bin/env bash

    rm -f %DesktopFilePath%
    rm -f %AppPath%
    rm -f %UninstallFilePath%''')

MIME_TYPE_FILE = textwrap.dedent("""\
    <?xml version="1.0" encoding="UTF-8"?>
    <mime-info xmlns='http://www.freedesktop.org/standards/shared-mime-info'>
      <mime-type type="%MimeType%">
        <comment>%Description%</comment>
        <glob pattern="%GlobPattern%"/>
      </mime-type>
    </mime-info>""")


def escape_path_for_desktop(path):
    """Escape the spaces of a path the way quoted Exec values expect them."""
    return str(path).replace(" ", "\\s")


def apply_replacements(template, replacements):
    """
    Replace every placeholder token of ``replacements`` in ``template``.

    :param template: The text holding ``%Token%`` placeholders
    :param replacements: Ordered (token, value) pairs, a value of None becomes an empty string
    :return: The rendered text
    """
    text = template
    for token, value in replacements:
        text = text.replace(token, '' if value is None else str(value))
    return text


def normalize_newlines(text):
    return text.replace('\r\n', '\n')


def get_replacements(request, path_data):
    """The placeholder values of one registration run."""
    mime = request.mime_type_info
    return [
        ('%AppName%', request.app_name),
        ('%AppClass%', request.window_class),
        ('%AppDescription%', request.app_description),
        ('%AppPath%', path_data.app_image_path),
        ('%EscapedAppPath%', escape_path_for_desktop(path_data.app_image_path)),
        ('%Category%', request.category),
        ('%IconPath%', path_data.selected_icon),
        ('%FolderPath%', path_data.app_image_folder),
        ('%DesktopFilePath%', path_data.desktop_file_path),
        ('%UninstallFilePath%', path_data.uninstall_file_path),
        ('%MimeType%', mime.mime_type if mime else None),
        ('%Description%', mime.description if mime else None),
        ('%GlobPattern%', mime.glob_pattern if mime else None),
    ]
