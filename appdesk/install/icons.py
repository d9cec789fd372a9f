"""
Place the icons of a registration in the icon theme tree.

Sized icons go to ``<icons>/hicolor/<N>x<N>/apps/<app_id><ext>``,
size independent icons (size 0) to ``<icons>/<app_id><ext>``.
"""

import io
import shutil
import logging

import imageio.v3 as iio

from .paths import ensure_folder, icon_size_folder
from .request import IconSpec
from ..utils.imconvert import to_rgba8, pad_square, box_resize

logger = logging.getLogger(__name__)


def create_icons(request, path_data, icons):
    """
    Write every icon of the request, in request order.

    Sets ``path_data.icon_paths`` and ``path_data.selected_icon``.
    The payload streams are closed after the copy, all of them also when
    a write fails.

    :param request: The RegistrationRequest
    :param path_data: The PathData of this run
    :param icons: The icon root folder
    :return: The list of written icon paths
    """
    ensure_folder(icons)
    ensure_folder(icons / 'hicolor')

    icon_paths = []
    selected_icon = None
    path_data.icon_paths = icon_paths

    for index, icon in enumerate(request.icons):
        extension = icon.normalized_extension

        try:
            folder = icon_size_folder(icons, icon.size) if icon.size > 0 else icons
            icon_path = folder / f'{request.app_id}{extension}'
            with open(icon_path, 'wb') as fp:
                shutil.copyfileobj(icon.stream, fp)
        except Exception:
            close_streams(request.icons[index + 1:])
            raise
        finally:
            icon.stream.close()

        logger.debug(f'Written icon {icon_path}')
        icon_paths.append(icon_path)

        if selected_icon is None and (icon.size == IconSpec.DYNAMIC_SIZE or extension != '.png'):
            selected_icon = icon_path

    path_data.selected_icon = str(selected_icon) if selected_icon is not None else request.app_id

    return icon_paths


def close_streams(icons):
    for icon in icons:
        icon.stream.close()


def read_icon(stream):
    return iio.imread(stream.read())


def icon_size(stream):
    """
    The theme size of a raster icon.

    Non square images are size independent and get size 0.
    """
    array = read_icon(stream)
    height, width = array.shape[:2]
    return height if height == width else IconSpec.DYNAMIC_SIZE


def scale_icon(stream, sizes):
    """
    Scale a raster icon to square png icons of every size.

    :param stream: Binary stream of the source image
    :param sizes: The target sizes in pixels
    :return: List of IconSpec, one per size
    """
    array = pad_square(to_rgba8(read_icon(stream)))

    icons = []
    for size in sizes:
        scaled = box_resize(array, size, size)
        payload = iio.imwrite('<bytes>', scaled, extension='.png')
        icons.append(IconSpec(io.BytesIO(payload), '.png', size))
        logger.debug(f'Scaled icon from {array.shape[0]} to {size} pixels')

    return icons
