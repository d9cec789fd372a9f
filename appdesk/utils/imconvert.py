"""Image array conversions used to prepare icons."""
import numpy as np


def to_rgba8(array):
    """Convert a mono, rgb or rgba image array to a 8 bit rgba array."""
    array = np.asarray(array)

    if array.dtype == np.uint16:
        array = (array >> 8).astype('uint8')

    elif array.dtype.kind == 'f':
        array = (array.clip(0, 1) * 255).round().astype('uint8')

    elif array.dtype != np.uint8:
        raise TypeError(f'dtype {array.dtype} not supported for icons')

    if array.ndim == 2:
        array = np.stack([array] * 3, axis=-1)

    if array.ndim != 3 or array.shape[2] not in (1, 2, 3, 4):
        raise ValueError(f'Unexpected image shape {array.shape}')

    if array.shape[2] == 1:
        array = np.concatenate([array] * 3, axis=-1)

    elif array.shape[2] == 2:
        #Mono with alpha
        array = np.concatenate([array[..., :1]] * 3 + [array[..., 1:]], axis=-1)

    if array.shape[2] == 3:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype='uint8')
        array = np.concatenate([array, alpha], axis=-1)

    return array


def pad_square(array):
    """Center the image on a transparent square canvas."""
    height, width = array.shape[:2]
    size = max(height, width)
    if height == width:
        return array

    canvas = np.zeros((size, size) + array.shape[2:], dtype=array.dtype)
    top = (size - height) // 2
    left = (size - width) // 2
    canvas[top:top + height, left:left + width] = array
    return canvas


def box_resize(array, height, width):
    """
    Resize an image array by averaging the source pixels of every target pixel.

    Enlarging falls back to pixel repetition.
    """
    src_height, src_width = array.shape[:2]
    values = array.astype('float64')

    rows = (np.arange(height) * src_height) // height
    cols = (np.arange(width) * src_width) // width

    row_counts = np.diff(np.append(rows, src_height)).clip(1, None)
    col_counts = np.diff(np.append(cols, src_width)).clip(1, None)

    summed = np.add.reduceat(values, rows, axis=0)
    summed = np.add.reduceat(summed, cols, axis=1)

    counts = np.outer(row_counts, col_counts)
    counts = counts.reshape(counts.shape + (1,) * (array.ndim - 2))

    return (summed / counts).round().astype(array.dtype)
