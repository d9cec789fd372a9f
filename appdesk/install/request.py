"""
The registration request, its parts and the outcome of a registration.

A request is normally made by ``make_request`` or by the fluent
``DesktopFileBuilder``. Both validate the request before anything is written.
"""

import os
import shutil
import subprocess
import tempfile
import uuid
import logging
from collections import namedtuple
from pathlib import Path

from ..core.conf import ensure_configured

logger = logging.getLogger(__name__)

# Freedesktop main categories
AUDIO_VIDEO = 'AudioVideo'
AUDIO = 'Audio'
VIDEO = 'Video'
DEVELOPMENT = 'Development'
EDUCATION = 'Education'
GAME = 'Game'
GRAPHICS = 'Graphics'
NETWORK = 'Network'
OFFICE = 'Office'
SETTINGS = 'Settings'
UTILITY = 'Utility'

CATEGORIES = [AUDIO_VIDEO, AUDIO, VIDEO, DEVELOPMENT, EDUCATION, GAME,
              GRAPHICS, NETWORK, OFFICE, SETTINGS, UTILITY]

UNINSTALL_ACTION_CODE = 'remove'

CustomAction = namedtuple('CustomAction', ['code', 'name', 'command', 'icon'], defaults=[None])

MimeSpec = namedtuple('MimeSpec', ['mime_type', 'description', 'glob_pattern', 'auto_associate'],
                      defaults=[False])


class IconSpec(object):
    """One icon payload to install."""

    DYNAMIC_SIZE = 0

    def __init__(self, stream, extension, size=DYNAMIC_SIZE):
        self.stream = stream
        self.extension = extension
        self.size = size

    @property
    def normalized_extension(self):
        extension = self.extension.lower()
        return extension if extension.startswith('.') else '.' + extension

    def __repr__(self):
        return f'IconSpec(extension={self.extension!r}, size={self.size})'


class RegistrationRequest(object):

    def __init__(self, app_id, app_name, app_description='', window_class=None, category=UTILITY,
                 icons=None, custom_actions=None, add_uninstall_action=False,
                 additional_uninstall_paths=None, mime_type_info=None, keywords=None):
        self.app_id = app_id
        self.app_name = app_name
        self.app_description = app_description
        self.window_class = window_class or app_name
        self.category = category
        self.icons = list(icons or [])
        self.custom_actions = list(custom_actions or [])
        self.add_uninstall_action = add_uninstall_action
        self.additional_uninstall_paths = [os.path.expanduser(str(path)) for path in additional_uninstall_paths or []]
        self.mime_type_info = mime_type_info
        self.keywords = list(keywords or [])

    def validate(self):
        """Raise ValueError when the request can not be registered."""
        if not self.app_id or '/' in self.app_id:
            raise ValueError(f'Invalid app id {self.app_id!r}')

        if not self.app_name:
            raise ValueError('The app name is required')

        for icon in self.icons:
            if icon.size < 0:
                raise ValueError(f'Invalid icon size {icon.size}')

        codes = [action.code for action in self.custom_actions]
        duplicates = sorted(set(code for code in codes if codes.count(code) > 1))
        if duplicates:
            raise ValueError(f'Duplicate action codes: {", ".join(duplicates)}')

        if self.add_uninstall_action and UNINSTALL_ACTION_CODE in codes:
            raise ValueError(f'The action code {UNINSTALL_ACTION_CODE!r} is reserved for the uninstall action')

        return self

    def __repr__(self):
        return f'RegistrationRequest(app_id={self.app_id!r}, app_name={self.app_name!r})'


def make_request(app_id, app_name, **kwargs):
    """
    Create a validated registration request.

    :param app_id: A unique reverse DNS identifier for the app, used as file name stem
    :param app_name: A friendly display name for the app
    :param kwargs: The optional fields of ``RegistrationRequest``
    :return: The request
    """
    return RegistrationRequest(app_id, app_name, **kwargs).validate()


class RegistrationResult(object):
    """Outcome of one registration attempt."""

    def __init__(self, success=False, error_message=None, mime_type_successful=False,
                 mime_type_error=None, added_files=None):
        self.success = success
        self.error_message = error_message
        self.mime_type_successful = mime_type_successful
        self.mime_type_error = mime_type_error
        self.added_files = list(added_files or [])

    def __bool__(self):
        return self.success

    def __repr__(self):
        return (f'RegistrationResult(success={self.success}, error_message={self.error_message!r}, '
                f'mime_type_successful={self.mime_type_successful}, '
                f'mime_type_error={self.mime_type_error!r})')


def remove_added_files(result):
    """Delete the files written by a registration, returns the removed paths."""
    removed = []
    for path in result.added_files:
        path = Path(path)
        if path.is_file():
            path.unlink()
            removed.append(path)
            logger.debug(f'Removed {path}')
    return removed


class DesktopFileBuilder(object):
    """
    Build a registration request by method chaining.

    Example::

        result = (DesktopFileBuilder('org.example.app', 'Example')
            .with_category(GRAPHICS)
            .add_icon_file('example.svg')
            .add_uninstall_action()
            .build())
    """

    def __init__(self, app_id, app_name):
        self.app_id = app_id
        self.app_name = app_name
        self._description = ''
        self._window_class = None
        self._category = UTILITY
        self._keywords = []
        self._icons = []
        self._custom_actions = []
        self._add_uninstall_action = False
        self._additional_uninstall_paths = []
        self._mime_type_info = None

    def with_description(self, description):
        self._description = description
        return self

    def with_window_class(self, window_class):
        self._window_class = window_class
        return self

    def with_category(self, category):
        self._category = category
        return self

    def with_keywords(self, *keywords):
        self._keywords.extend(keywords)
        return self

    def add_icon(self, stream, extension, size=IconSpec.DYNAMIC_SIZE):
        self._icons.append(IconSpec(stream, extension, size))
        return self

    def add_icon_file(self, path, size=None, scale=False):
        """
        Add an icon from a file.

        Vector icons are added size independent. Raster icons get their size
        from the image, or are scaled to every configured icon size.

        :param path: Path to the icon file
        :param size: Force the size of a raster icon
        :param scale: Scale a raster icon to the sizes of ``config['icons']['scale_sizes']``
        """
        from .icons import icon_size, scale_icon

        path = Path(path)
        extension = path.suffix

        if extension.lower() == '.svg':
            self._icons.append(IconSpec(open(path, 'rb'), extension, IconSpec.DYNAMIC_SIZE))

        elif scale:
            sizes = ensure_configured()['icons']['scale_sizes']
            with open(path, 'rb') as fp:
                self._icons.extend(scale_icon(fp, sizes))

        else:
            if size is None:
                with open(path, 'rb') as fp:
                    size = icon_size(fp)
            self._icons.append(IconSpec(open(path, 'rb'), extension, size))

        return self

    def add_custom_arguments_action(self, code, name, arguments, icon=None):
        """
        Add a quick list action which starts the app with extra arguments.

        :param code: Unique code for the quick list entry
        :param name: The display name of the quick list entry
        :param arguments: The command line arguments to pass to the application
        :param icon: The icon to display
        """
        self._custom_actions.append(CustomAction(code, name, f'"%EscapedAppPath%" {arguments}', icon))
        return self

    def add_custom_command_action(self, code, name, command, icon=None):
        """
        Add a quick list action which runs any command.

        :param code: Unique code for the quick list entry
        :param name: The display name of the quick list entry
        :param command: The full path and arguments to use for the action
        :param icon: The icon to display
        """
        self._custom_actions.append(CustomAction(code, name, command, icon))
        return self

    def add_uninstall_action(self, *additional_uninstall_paths):
        """
        Add an uninstall script and quick list action which removes the bundle,
        the desktop file, the icons and ``additional_uninstall_paths``.
        """
        self._add_uninstall_action = True
        self._additional_uninstall_paths.extend(additional_uninstall_paths)
        return self

    def with_mime_type(self, mime_type, description, glob_pattern, auto_associate=False):
        self._mime_type_info = MimeSpec(mime_type, description, glob_pattern, auto_associate)
        return self

    def with_debug_app_image(self, app_image_path, squash_path=None):
        """
        Fake the bundle environment of a development run.

        The bundle is copied to a new temporary folder and extracted there,
        unless the extracted contents are given by ``squash_path``.
        """
        if not app_image_path or not Path(app_image_path).is_file():
            return self

        conf = ensure_configured()

        if not squash_path:
            temp_path = Path(tempfile.gettempdir()) / str(uuid.uuid4())
            if temp_path.exists():
                shutil.rmtree(temp_path)
            temp_path.mkdir(parents=True)

            temp_app_image_path = temp_path / 'test.AppImage'
            shutil.copy(app_image_path, temp_app_image_path)
            temp_app_image_path.chmod(0o755)

            logger.info(f'Extracting {temp_app_image_path}')
            subprocess.run([str(temp_app_image_path), '--appimage-extract'], cwd=temp_path,
                           stdout=subprocess.DEVNULL, check=True)

            app_image_path = temp_app_image_path
            squash_path = temp_path / 'squashfs-root'

        os.environ[conf['env_appimage']] = str(app_image_path)
        os.environ[conf['env_appdir']] = str(squash_path)

        return self

    def request(self):
        return make_request(
            self.app_id, self.app_name,
            app_description=self._description,
            window_class=self._window_class,
            category=self._category,
            icons=self._icons,
            custom_actions=self._custom_actions,
            add_uninstall_action=self._add_uninstall_action,
            additional_uninstall_paths=self._additional_uninstall_paths,
            mime_type_info=self._mime_type_info,
            keywords=self._keywords)

    def build(self):
        """Register the desktop file, returns the RegistrationResult."""
        from .freedesktop import create_desktop_file
        return create_desktop_file(self.request())
