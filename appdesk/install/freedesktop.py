"""
Install a bundled application in a FreeDesktop.org desktop environment.

This places a <app_id>.desktop file in folder `~/.local/share/applications/`,
its icons below `~/.icons/`, optionally an uninstall script in
`~/.local/share/app-image-uninstalls/` and a mime type registration.

The bundle is found by the environment variables set by the bundle runtime:
APPIMAGE is the path of the bundle file, APPDIR the path of its mounted contents.

Usage:

    if not check_if_desktop_file_exists('org.example.app'):
        create_desktop_file(make_request('org.example.app', 'Example', icons=[...]))

"""

import os
import logging
from pathlib import Path

from ..core.conf import ensure_configured
from . import paths
from .entry import create_desktop_file as write_desktop_file
from .icons import create_icons
from .mime import is_valid_mime_type, register_mime_type
from .request import RegistrationResult
from .templates import escape_path_for_desktop
from .uninstall import create_uninstall_file

logger = logging.getLogger(__name__)


def get_app_image_path():
    return os.environ.get(ensure_configured()['env_appimage'])


def get_app_dir_path():
    return os.environ.get(ensure_configured()['env_appdir'])


def check_if_desktop_file_exists(app_id):
    """
    Is the desktop file of the current bundle already registered?

    Outside a bundle there is nothing to register and True is returned.
    A desktop file referring to another bundle path counts as not registered.
    """
    app_image_path = get_app_image_path()
    if not app_image_path or not Path(app_image_path).is_file():
        return True

    desktop_file_path = paths.desktop_file_name(paths.desktop_folder(), app_id)
    if not desktop_file_path.is_file():
        return False

    desktop_file_contents = desktop_file_path.read_text()
    return escape_path_for_desktop(app_image_path) in desktop_file_contents


def failed(message, added_files):
    logger.error(message)
    return RegistrationResult(success=False, error_message=message, added_files=added_files)


def create_desktop_file(request):
    """
    Create the desktop file, icons, uninstall script and mime type of the request.

    Every stage is tried once, a failing stage stops the registration and
    leaves the files written so far. A failing mime type registration does
    not fail the registration.

    The MimeType= line is only written for a mime spec which passes
    ``is_valid_mime_type``, deviating from writing it for any present spec.
    An invalid spec is reported by ``mime_type_error`` instead of leaving an
    unregistered mime type in the desktop file.

    :param request: The RegistrationRequest
    :return: The RegistrationResult
    """
    request.validate()
    conf = ensure_configured()
    added_files = []

    app_image_path = get_app_image_path()
    if not app_image_path or not Path(app_image_path).is_file():
        return failed(f"{conf['env_appimage']} missing from environment or the file is not found", added_files)

    app_dir_path = get_app_dir_path()
    if not app_dir_path or not Path(app_dir_path).exists():
        return failed(f"{conf['env_appdir']} missing from environment or the folder is not found", added_files)

    desktop_folder = paths.desktop_folder()

    try:
        paths.ensure_folder(desktop_folder)
    except OSError as e:
        return failed(f'Failed creating the folder to place the desktop file in: {e}', added_files)

    path_data = paths.PathData(app_image_path, paths.desktop_file_name(desktop_folder, request.app_id))

    try:
        create_icons(request, path_data, paths.icon_folder())
    except (OSError, ValueError) as e:
        added_files.extend(path_data.icon_paths)
        return failed(f'Failed creating the icon file(s): {e}', added_files)

    added_files.extend(path_data.icon_paths)

    actions = list(request.custom_actions)

    if request.add_uninstall_action:
        try:
            actions.append(create_uninstall_file(request, path_data, paths.uninstall_folder()))
            added_files.append(path_data.uninstall_file_path)
        except OSError as e:
            return failed(f'Failed creating the uninstall file: {e}', added_files)

    mime_info = request.mime_type_info
    mime_type = None
    if mime_info and is_valid_mime_type(mime_info.mime_type, mime_info.glob_pattern):
        mime_type = mime_info.mime_type

    try:
        added_files.append(write_desktop_file(request, path_data, actions, mime_type))
    except OSError as e:
        return failed(f'Failed creating the desktop file: {e}', added_files)

    result = RegistrationResult(success=True, added_files=added_files)

    if mime_info:
        result.mime_type_successful, result.mime_type_error = \
            register_mime_type(mime_info, path_data.desktop_file_path, result.added_files)

    logger.info(f'Registered {request.app_id} in {path_data.desktop_file_path}')

    return result
