"""
Storage for the images of the octave being processed
"""

from typing import List

from ..algorithms.pixel_math import subtract, divide
from ..models.image import ImageBuffer


class OctaveStorage:
    """
    Fixed pool of same-sized buffers reused by every octave.

    Holds the blurred scales, the Difference of Gaussian images and the
    scratch image used by the separable blur. All of them are reshaped
    together.
    """

    def __init__(self, num_scales: int):
        self.scales: List[ImageBuffer] = [ImageBuffer(1, 1) for _ in range(num_scales)]
        self.dogs: List[ImageBuffer] = [ImageBuffer(1, 1) for _ in range(num_scales - 1)]
        self.storage = ImageBuffer(1, 1)

    @property
    def num_scales(self) -> int:
        return len(self.scales)

    @property
    def width(self) -> int:
        return self.scales[0].width

    @property
    def height(self) -> int:
        return self.scales[0].height

    def owns(self, image: ImageBuffer) -> bool:
        """True if the image is one of the pool's buffers"""
        return any(image is buffer for buffer in self.scales + self.dogs + [self.storage])

    def reshape(self, width: int, height: int):
        """
        Reshape every buffer in the pool. Pixel values are not preserved.
        """
        for image in self.scales:
            image.reshape(width, height)
        for image in self.dogs:
            image.reshape(width, height)
        self.storage.reshape(width, height)

    def compute_dog(self, base_sigma: float):
        """
        Difference of Gaussian between adjacent scales.

        Each difference is divided by (k - 1) * sigma^2 so that it better
        approximates the scale normalized Laplacian of Gaussian.
        """
        for i in range(1, len(self.scales)):
            dog = self.dogs[i - 1]
            subtract(self.scales[i], self.scales[i - 1], dog)

            k = (i + 1) / i
            adjustment = (k - 1) * base_sigma * base_sigma
            divide(dog, adjustment, dog)
