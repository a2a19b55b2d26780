"""
Dense 2-D float image buffer
"""

from typing import Tuple

import numpy as np


class ImageBuffer:
    """
    Single band float32 image that can be reshaped in place.

    Pixels are addressed as (x, y) like the rest of the scale-space code,
    while ``data`` exposes the usual numpy (row, column) view. Reshaping
    reuses the backing array whenever it is large enough.
    """

    def __init__(self, width: int = 1, height: int = 1):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid image size: {width}x{height}")
        self._backing = np.zeros(width * height, dtype=np.float32)
        self.data = self._backing.reshape(height, width)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'ImageBuffer':
        """Create a buffer holding a float32 copy of a 2-D array"""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got shape {array.shape}")
        buffer = cls(array.shape[1], array.shape[0])
        buffer.data[...] = array
        return buffer

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), numpy order"""
        return self.data.shape

    def reshape(self, width: int, height: int):
        """
        Change the image size without any guarantee about the pixel values.

        Reshaping to the current size leaves the contents untouched.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Invalid image size: {width}x{height}")
        if (width, height) == (self.width, self.height):
            return

        if width * height > self._backing.size:
            self._backing = np.zeros(width * height, dtype=np.float32)
        self.data = self._backing[:width * height].reshape(height, width)

    def is_inbounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> float:
        if not self.is_inbounds(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return float(self.data[y, x])

    def set(self, x: int, y: int, value: float):
        if not self.is_inbounds(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        self.data[y, x] = value

    def unsafe_get(self, x: int, y: int) -> float:
        return float(self.data[y, x])

    def unsafe_set(self, x: int, y: int, value: float):
        self.data[y, x] = value

    def copy(self) -> np.ndarray:
        """Copy of the pixels as a standalone array"""
        return self.data.copy()

    def same_shape(self, other: 'ImageBuffer') -> bool:
        return self.shape == other.shape

    def __repr__(self) -> str:
        return f"ImageBuffer({self.width}x{self.height})"
