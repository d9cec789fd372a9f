"""
Locations of the files written by a registration.

The base folders follow the XDG base directories of the current user,
every one of them can be overruled by a ``path_*`` configuration key.
"""

import os
from pathlib import Path

from ..core.conf import ensure_configured, config_path


def ensure_folder(path):
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def data_home():
    return Path(os.environ.get('XDG_DATA_HOME') or Path.home() / '.local' / 'share')


def config_home():
    return Path(os.environ.get('XDG_CONFIG_HOME') or Path.home() / '.config')


def desktop_folder():
    return config_path('path_applications') or data_home() / 'applications'


def desktop_file_name(folder, app_id):
    return Path(folder) / f'{app_id}.desktop'


def icon_folder():
    return config_path('path_icons') or Path.home() / '.icons'


def icon_size_folder(icons, size):
    """The ``hicolor/<size>x<size>/apps`` folder below ``icons``, created on demand."""
    return ensure_folder(Path(icons) / 'hicolor' / f'{size}x{size}' / 'apps')


def uninstall_folder():
    return config_path('path_uninstalls') or data_home() / ensure_configured()['uninstall_folder_name']


def uninstall_file_name(folder, app_id):
    return Path(folder) / f'{app_id}.sh'


def mime_folder():
    return config_path('path_mime') or data_home() / 'mime'


def mime_packages_folder(mime_root=None):
    return Path(mime_root or mime_folder()) / 'packages'


def mime_file_name(packages_folder, mime_type):
    subtype = mime_type.split('/', 1)[1]
    return Path(packages_folder) / f'{subtype}.xml'


def mimeapps_file():
    return config_path('path_mimeapps') or config_home() / 'mimeapps.list'


class PathData(object):
    """All locations used by one registration run."""

    def __init__(self, app_image_path, desktop_file_path):
        self.app_image_path = Path(app_image_path)
        self.app_image_folder = self.app_image_path.parent
        self.desktop_file_path = Path(desktop_file_path)
        self.selected_icon = None
        self.icon_paths = []
        self.uninstall_file_path = None

    def __repr__(self):
        return f'PathData(app_image_path={str(self.app_image_path)!r}, desktop_file_path={str(self.desktop_file_path)!r})'
