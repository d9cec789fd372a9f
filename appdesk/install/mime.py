"""
Register a custom mime type and make the app its default application.

The mime type is described by a shared-mime-info package file,
the association is stored in the user's ``mimeapps.list``.
Afterwards the mime and desktop databases are refreshed by their
external commands.
"""

import configparser
import logging
import subprocess
from pathlib import Path
from xml.sax.saxutils import escape

from ..core.conf import ensure_configured
from . import paths
from .templates import MIME_TYPE_FILE, apply_replacements

logger = logging.getLogger(__name__)

DEFAULT_APPLICATIONS = 'Default Applications'
ADDED_ASSOCIATIONS = 'Added Associations'

XML_ATTRIBUTE_ENTITIES = {'"': '&quot;'}


def is_valid_mime_type(mime_type, glob_pattern):
    """A mime type is ``type/subtype``, a glob pattern ``*.ext``."""
    parts = (mime_type or '').split('/')
    if len(parts) != 2 or not all(parts):
        return False
    return (glob_pattern or '').startswith('*.')


def render_mime_file(mime_info):
    return apply_replacements(MIME_TYPE_FILE, [
        ('%MimeType%', escape(mime_info.mime_type, XML_ATTRIBUTE_ENTITIES)),
        ('%Description%', escape(mime_info.description)),
        ('%GlobPattern%', escape(mime_info.glob_pattern, XML_ATTRIBUTE_ENTITIES))]) + '\n'


class MimeAppsList(object):
    """
    The sections and key values of a ``mimeapps.list`` file.

    Sections and keys which are not touched are written back as they were read.
    Comments are not kept. A file which is not valid utf-8 or not in key=value
    format raises UnicodeDecodeError or configparser.Error on read.
    """

    def __init__(self, path):
        self.path = Path(path)
        self.parser = configparser.ConfigParser(interpolation=None, strict=False, delimiters=('=',))
        self.parser.optionxform = str

    def read(self):
        if self.path.exists():
            with self.path.open('r', encoding='utf-8') as fp:
                self.parser.read_file(fp)
        return self

    def get(self, section, key, default=None):
        return self.parser.get(section, key, fallback=default)

    def set(self, section, key, value):
        if not self.parser.has_section(section):
            self.parser.add_section(section)
        self.parser.set(section, key, value)

    def sections(self):
        return self.parser.sections()

    def write(self):
        paths.ensure_folder(self.path.parent)
        with self.path.open('w', encoding='utf-8') as fp:
            self.parser.write(fp, space_around_delimiters=False)


def associate(mime_type, desktop_file_name, auto_associate=False, mimeapps_path=None):
    """Make ``desktop_file_name`` the default application of ``mime_type``."""
    mimeapps = MimeAppsList(mimeapps_path or paths.mimeapps_file()).read()

    mimeapps.set(DEFAULT_APPLICATIONS, mime_type, desktop_file_name)

    if auto_associate:
        mimeapps.set(ADDED_ASSOCIATIONS, mime_type, desktop_file_name)

    mimeapps.write()
    logger.debug(f'Associated {mime_type} with {desktop_file_name} in {mimeapps.path}')
    return mimeapps.path


def run_refresh(args):
    """
    Run a database refresh command, wait for it to finish.

    :return: Empty string on success, otherwise the error description
    """
    timeout = ensure_configured()['mime']['refresh_timeout']
    command = ' '.join(args)

    try:
        subprocess.run(args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL,
                       timeout=timeout, check=True)

    except subprocess.TimeoutExpired:
        message = f'{command} did not finish within {timeout} seconds'
        logger.warning(message)
        return message

    except subprocess.CalledProcessError as e:
        message = f'{command} failed with exit code {e.returncode}'
        logger.warning(message)
        return message

    except OSError as e:
        message = f'Could not run {command}: {e}'
        logger.warning(message)
        return message

    logger.debug(f'Refreshed by {command}')
    return ''


def refresh_databases(mime_root):
    mime_conf = ensure_configured()['mime']
    errors = [run_refresh([mime_conf['update_mime_database'], str(mime_root)]),
              run_refresh([mime_conf['update_desktop_database']])]
    return '; '.join(error for error in errors if error)


def register_mime_type(mime_info, desktop_file_path, added_files=None):
    """
    Register the mime type and associate it with the desktop file.

    :param mime_info: The MimeSpec
    :param desktop_file_path: Path of the written .desktop file
    :param added_files: Optional list, the written mime package file is appended
    :return: Tuple of success flag and error message (empty on success)
    """
    if not is_valid_mime_type(mime_info.mime_type, mime_info.glob_pattern):
        message = f'Invalid mime type or glob pattern: {mime_info.mime_type!r} {mime_info.glob_pattern!r}'
        logger.error(message)
        return False, message

    mime_root = paths.mime_folder()

    try:
        packages_folder = paths.ensure_folder(paths.mime_packages_folder(mime_root))
        mime_file = paths.mime_file_name(packages_folder, mime_info.mime_type)
        mime_file.write_text(render_mime_file(mime_info))
        logger.debug(f'Written mime package {mime_file}')

        if added_files is not None:
            added_files.append(mime_file)

        associate(mime_info.mime_type, Path(desktop_file_path).name, mime_info.auto_associate)

    except (OSError, ValueError, configparser.Error) as e:
        message = f'Failed registering the mime type: {e}'
        logger.error(message)
        return False, message

    error = refresh_databases(mime_root)
    return not error, error
