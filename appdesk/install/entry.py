import logging

from .templates import DESKTOP_FILE, apply_replacements, get_replacements, normalize_newlines

logger = logging.getLogger(__name__)


def render_desktop_file(request, path_data, actions, mime_type=None):
    """
    Render the content of the .desktop file.

    :param request: The RegistrationRequest
    :param path_data: The PathData of this run, icons already placed
    :param actions: The CustomActions in order, including a generated uninstall action
    :param mime_type: The mime type the app handles, if any
    :return: The text, ending on a single newline
    """
    replacements = get_replacements(request, path_data)
    text = apply_replacements(DESKTOP_FILE, replacements)

    if request.keywords:
        text += '\nKeywords=' + ''.join(f'{keyword};' for keyword in request.keywords)

    if mime_type:
        text += f'\nMimeType={mime_type};'

    if actions:
        text += '\nActions=' + ';'.join(action.code for action in actions) + '\n'

        for action in actions:
            text += '\n'
            text += f'[Desktop Action {action.code}]\n'
            text += f'Name={action.name}\n'
            text += f'Exec={apply_replacements(action.command, replacements)}\n'
            if action.icon:
                text += f'Icon={action.icon}\n'

    return normalize_newlines(text).rstrip('\n') + '\n'


def create_desktop_file(request, path_data, actions, mime_type=None):
    text = render_desktop_file(request, path_data, actions, mime_type)
    path_data.desktop_file_path.write_text(text)
    logger.debug(f'Written desktop file {path_data.desktop_file_path}')
    return path_data.desktop_file_path
