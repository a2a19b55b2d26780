"""
Separable Gaussian blur with border normalization
"""

import math
from typing import Dict, Optional

import cv2
import numpy as np

from ..models.image import ImageBuffer


def kernel_radius(sigma: float) -> int:
    """
    Radius needed to cover three standard deviations
    """
    return max(1, int(math.ceil(3.0 * sigma)))


def gaussian_kernel(sigma: float, radius: Optional[int] = None) -> np.ndarray:
    """
    Normalized 1D Gaussian kernel of length 2 * radius + 1
    """
    if not sigma > 0:
        raise ValueError(f"sigma must be positive, got {sigma}")
    if radius is None:
        radius = kernel_radius(sigma)

    x = np.arange(-radius, radius + 1, dtype=np.float64)
    kernel = np.exp(-(x ** 2) / (2.0 * sigma ** 2))
    kernel /= kernel.sum()

    return kernel.astype(np.float32)


class GaussianBlur:
    """
    Blurs an image by convolving it horizontally and then vertically.

    Pixels outside the image are ignored and each output pixel is divided
    by the kernel weight that fell inside the image, so borders are not
    darkened and a constant image stays constant.
    """

    def __init__(self):
        self._kernels: Dict[float, np.ndarray] = {}

    def kernel(self, sigma: float) -> np.ndarray:
        kernel = self._kernels.get(sigma)
        if kernel is None:
            kernel = gaussian_kernel(sigma)
            self._kernels[sigma] = kernel
        return kernel

    def apply(
        self,
        src: ImageBuffer,
        dst: ImageBuffer,
        sigma: float,
        storage: Optional[ImageBuffer] = None
    ):
        """
        Blur src into dst. storage receives the horizontal pass.

        src and dst may be the same buffer.
        """
        if storage is None:
            storage = ImageBuffer(src.width, src.height)
        if not (src.same_shape(dst) and src.same_shape(storage)):
            raise ValueError(
                f"Blur images must share one shape: {src.shape}, {dst.shape}, {storage.shape}"
            )

        kernel = self.kernel(sigma)
        self.horizontal(kernel, src, storage)
        self.vertical(kernel, storage, dst)

    @staticmethod
    def horizontal(kernel: np.ndarray, src: ImageBuffer, dst: ImageBuffer):
        row = kernel.reshape(1, -1)
        convolved = cv2.filter2D(src.data, cv2.CV_32F, row, borderType=cv2.BORDER_CONSTANT)
        weights = cv2.filter2D(
            np.ones((1, src.width), dtype=np.float32),
            cv2.CV_32F,
            row,
            borderType=cv2.BORDER_CONSTANT
        )
        np.divide(convolved, weights, out=dst.data)

    @staticmethod
    def vertical(kernel: np.ndarray, src: ImageBuffer, dst: ImageBuffer):
        column = kernel.reshape(-1, 1)
        convolved = cv2.filter2D(src.data, cv2.CV_32F, column, borderType=cv2.BORDER_CONSTANT)
        weights = cv2.filter2D(
            np.ones((src.height, 1), dtype=np.float32),
            cv2.CV_32F,
            column,
            borderType=cv2.BORDER_CONSTANT
        )
        np.divide(convolved, weights, out=dst.data)
