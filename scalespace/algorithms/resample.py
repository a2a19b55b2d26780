"""
Down-sampling and up-sampling by a factor of two
"""

from ..models.image import ImageBuffer


def downsample(src: ImageBuffer, dst: ImageBuffer):
    """
    Halve the image size by copying every other pixel, starting with pixel 1.

    No averaging is done, dst(x, y) = src(2x + 1, 2y + 1).
    """
    width = src.width // 2
    height = src.height // 2
    if dst.width != width or dst.height != height:
        raise ValueError(
            f"Down-sampled image must be {width}x{height}, not {dst.width}x{dst.height}"
        )

    dst.data[...] = src.data[1:2 * height:2, 1:2 * width:2]


def upsample(src: ImageBuffer, dst: ImageBuffer):
    """
    Double the image size by copying each pixel into a 2x2 block
    """
    width = src.width * 2
    height = src.height * 2
    if dst.width != width or dst.height != height:
        raise ValueError(
            f"Up-sampled image must be {width}x{height}, not {dst.width}x{dst.height}"
        )

    dst.data[0::2, 0::2] = src.data
    dst.data[0::2, 1::2] = src.data
    dst.data[1::2, 0::2] = src.data
    dst.data[1::2, 1::2] = src.data
