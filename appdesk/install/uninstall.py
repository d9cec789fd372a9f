import logging
import shlex
import stat
from pathlib import Path

from ..core.conf import ensure_configured
from .paths import ensure_folder, uninstall_file_name
from .request import CustomAction, UNINSTALL_ACTION_CODE
from .templates import UNINSTALL_FILE, apply_replacements, get_replacements, normalize_newlines

logger = logging.getLogger(__name__)

UNINSTALL_FILE_MODE = stat.S_IRUSR | stat.S_IWUSR | stat.S_IXUSR | stat.S_IXGRP

QUOTED_TOKENS = ('%DesktopFilePath%', '%AppPath%', '%UninstallFilePath%')


def removal_line(path):
    """Paths without extension are folders and are removed recursively."""
    path = str(path)
    if Path(path).suffix:
        return f'rm -f {shlex.quote(path)}'
    else:
        return f'rm -rf {shlex.quote(path)}'


def render_uninstall_file(request, path_data):
    """The script text, every path is shell quoted."""
    replacements = [(token, shlex.quote(str(value)) if token in QUOTED_TOKENS else value)
                    for token, value in get_replacements(request, path_data)]
    text = apply_replacements(UNINSTALL_FILE, replacements)

    paths = list(request.additional_uninstall_paths) + [str(path) for path in path_data.icon_paths]
    for path in paths:
        text += '\n' + removal_line(path)

    return normalize_newlines(text) + '\n'


def create_uninstall_file(request, path_data, folder):
    """
    Write the uninstall script and make it executable.

    :param request: The RegistrationRequest
    :param path_data: The PathData, its ``uninstall_file_path`` is set here
    :param folder: The folder of the uninstall scripts
    :return: The CustomAction which runs the script
    """
    ensure_folder(folder)

    path_data.uninstall_file_path = uninstall_file_name(folder, request.app_id)

    path_data.uninstall_file_path.write_text(render_uninstall_file(request, path_data))
    path_data.uninstall_file_path.chmod(UNINSTALL_FILE_MODE)

    logger.debug(f'Written uninstall script {path_data.uninstall_file_path}')

    return CustomAction(UNINSTALL_ACTION_CODE, f'Uninstall {request.app_name}',
                        str(path_data.uninstall_file_path),
                        ensure_configured()['uninstall_action_icon'])
