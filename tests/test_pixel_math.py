"""
Tests for element-wise image math
"""

import numpy as np
import pytest

from scalespace.algorithms.pixel_math import divide, subtract
from scalespace.models.image import ImageBuffer


def test_subtract():
    a = ImageBuffer.from_array(np.array([[5, 6], [7, 8]]))
    b = ImageBuffer.from_array(np.array([[1, 2], [3, 4]]))
    out = ImageBuffer(2, 2)

    subtract(a, b, out)

    np.testing.assert_array_equal(out.data, np.full((2, 2), 4, dtype=np.float32))


def test_divide_in_place():
    image = ImageBuffer.from_array(np.array([[2, 4], [6, 8]]))
    divide(image, 2.0, image)
    np.testing.assert_array_equal(image.data, [[1, 2], [3, 4]])


def test_shape_mismatch():
    with pytest.raises(ValueError):
        subtract(ImageBuffer(2, 2), ImageBuffer(3, 2), ImageBuffer(2, 2))
    with pytest.raises(ValueError):
        divide(ImageBuffer(2, 2), 1.0, ImageBuffer(2, 3))
