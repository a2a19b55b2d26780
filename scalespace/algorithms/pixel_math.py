"""
Element-wise operations on image buffers
"""

import numpy as np

from ..models.image import ImageBuffer


def _check_shape(*images: ImageBuffer):
    shape = images[0].shape
    for image in images[1:]:
        if image.shape != shape:
            raise ValueError(f"Image shapes do not match: {shape} vs {image.shape}")


def subtract(a: ImageBuffer, b: ImageBuffer, out: ImageBuffer):
    """out = a - b"""
    _check_shape(a, b, out)
    np.subtract(a.data, b.data, out=out.data)


def divide(src: ImageBuffer, denominator: float, out: ImageBuffer):
    """out = src / denominator"""
    _check_shape(src, out)
    np.divide(src.data, np.float32(denominator), out=out.data)
