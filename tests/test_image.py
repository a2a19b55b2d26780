"""
Tests for the reshapeable image buffer
"""

import numpy as np
import pytest

from scalespace.models.image import ImageBuffer


def test_new_buffer_is_zero():
    image = ImageBuffer(4, 3)
    assert image.width == 4
    assert image.height == 3
    assert image.shape == (3, 4)
    assert np.all(image.data == 0)


def test_from_array_copies_as_float32():
    array = np.arange(6, dtype=np.uint8).reshape(2, 3)
    image = ImageBuffer.from_array(array)

    assert image.data.dtype == np.float32
    assert (image.width, image.height) == (3, 2)
    array[0, 0] = 100
    assert image.get(0, 0) == 0


def test_from_array_rejects_color():
    with pytest.raises(ValueError):
        ImageBuffer.from_array(np.zeros((4, 4, 3)))


def test_get_and_set_use_x_y_order():
    image = ImageBuffer(5, 2)
    image.set(4, 1, 7.5)

    assert image.get(4, 1) == 7.5
    assert image.data[1, 4] == 7.5
    assert image.unsafe_get(4, 1) == 7.5


def test_checked_access_out_of_bounds():
    image = ImageBuffer(3, 3)
    with pytest.raises(IndexError):
        image.get(3, 0)
    with pytest.raises(IndexError):
        image.set(0, -1, 1.0)


def test_reshape_changes_size():
    image = ImageBuffer(1, 1)
    image.reshape(8, 6)
    assert image.shape == (6, 8)

    image.reshape(4, 3)
    assert image.shape == (3, 4)


def test_reshape_to_same_size_keeps_pixels():
    image = ImageBuffer.from_array(np.full((4, 4), 2.0))
    image.reshape(4, 4)
    assert np.all(image.data == 2.0)


def test_shrinking_reuses_backing_array():
    image = ImageBuffer(10, 10)
    backing = image._backing
    image.reshape(5, 5)
    assert image._backing is backing
    assert np.shares_memory(image.data, backing)


def test_copy_is_independent():
    image = ImageBuffer.from_array(np.ones((3, 3)))
    copy = image.copy()
    image.set(1, 1, 5.0)
    assert copy[1, 1] == 1.0
