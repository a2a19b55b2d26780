"""
Scale-space pyramid used by SIFT style feature detectors
"""

import logging
from enum import Enum
from typing import List, Union

import numpy as np

from ..algorithms.blur import GaussianBlur
from ..algorithms.resample import downsample, upsample
from ..models.config import PyramidConfig
from ..models.image import ImageBuffer
from ..models.octave import OctaveInfo, OctaveSnapshot
from .octave import OctaveStorage
from .schedule import MIN_OCTAVE_SIZE, increment_sigma, next_octave_size, scale_sigma


logger = logging.getLogger(__name__)


class PyramidStateError(RuntimeError):
    """Raised when an operation is not valid in the pyramid's current state"""


class PyramidState(Enum):
    UNINITIALIZED = 'uninitialized'
    OCTAVE_READY = 'octave_ready'
    EXHAUSTED = 'exhausted'


class ScaleSpacePyramid:
    """
    Constructs the scale-space in which SIFT detects features.

    An octave contains a set of scales, each blurrier than the previous one.
    Each octave is half the width and height of the previous octave. Only
    one octave exists at a time: compute_next_octave() overwrites the
    images of the current octave, so copy them (see snapshot()) if they
    are needed later.
    """

    def __init__(
        self,
        num_scales: int = 5,
        base_sigma: float = 1.6,
        double_input_image: bool = False
    ):
        self.blur = GaussianBlur()
        self.configure(num_scales, base_sigma, double_input_image)

    @classmethod
    def from_config(cls, config: PyramidConfig) -> 'ScaleSpacePyramid':
        return cls(config.num_scales, config.base_sigma, config.double_input_image)

    def configure(
        self,
        num_scales: int,
        base_sigma: float,
        double_input_image: bool
    ):
        """
        Set the pyramid parameters and allocate placeholder images.

        Any processed octave is discarded. Raises ConfigurationError if
        fewer than 3 scales are requested.
        """
        self.config = PyramidConfig(num_scales, base_sigma, double_input_image)
        self.octave_storage = OctaveStorage(num_scales)

        self._state = PyramidState.UNINITIALIZED
        self._pixel_scale = 1.0
        self._prior_sigma_first_scale = 0.0
        self._octave = 0
        self._dog_ready = False

    def apply_config(self, config: PyramidConfig):
        """ConfigController listener"""
        logger.debug(f"Reconfiguring pyramid: {config}")
        self.configure(config.num_scales, config.base_sigma, config.double_input_image)

    @property
    def num_scales(self) -> int:
        return self.config.num_scales

    @property
    def base_sigma(self) -> float:
        return self.config.base_sigma

    @property
    def double_input_image(self) -> bool:
        return self.config.double_input_image

    @property
    def state(self) -> PyramidState:
        return self._state

    @property
    def pixel_scale(self) -> float:
        """
        Ratio of pixels in the original image to the current octave.
        x = x' * pixel_scale, where x is in the input and x' in the octave.
        """
        return self._pixel_scale

    @property
    def prior_sigma_first_scale(self) -> float:
        """Blur present in the first scale before this octave was constructed"""
        return self._prior_sigma_first_scale

    @property
    def octave(self) -> int:
        return self._octave

    @property
    def width(self) -> int:
        return self.octave_storage.width

    @property
    def height(self) -> int:
        return self.octave_storage.height

    def process(self, image: Union[np.ndarray, ImageBuffer]):
        """
        Build the first octave of the pyramid from the input image
        """
        input_image = self._to_buffer(image)
        width, height = input_image.width, input_image.height
        if self.double_input_image:
            width, height = width * 2, height * 2
        if width < MIN_OCTAVE_SIZE or height < MIN_OCTAVE_SIZE:
            raise ValueError(f"Input image is too small: {width}x{height}")

        self._prior_sigma_first_scale = 0.0
        self._octave = 0
        self._dog_ready = False

        scales = self.octave_storage.scales
        if self.double_input_image:
            self._pixel_scale = 0.5
            self.octave_storage.reshape(width, height)
            upsample(input_image, scales[1])
            self._blur(scales[1], scales[0], self.base_sigma)
        else:
            self._pixel_scale = 1.0
            self.octave_storage.reshape(width, height)
            self._blur(input_image, scales[0], self.base_sigma)

        self._construct_rest_of_octave()
        self._state = PyramidState.OCTAVE_READY

        logger.debug(
            f"Octave 0 built: {width}x{height}, pixel scale {self._pixel_scale}"
        )

    def compute_next_octave(self) -> bool:
        """
        Build the next octave by sub-sampling the second scale of the current
        octave and blurring it further.

        Returns False when the next octave would be too small to process.
        The images of the current octave are left untouched, but the pixel
        scale and prior sigma have already advanced to the next octave.
        """
        if self._state is PyramidState.UNINITIALIZED:
            raise PyramidStateError("process() must be called before compute_next_octave()")
        if self._state is PyramidState.EXHAUSTED:
            return False

        # the second level seeds the next octave
        self._prior_sigma_first_scale = self.compute_scale_sigma(1)
        self._pixel_scale *= 2

        size = next_octave_size(self.width, self.height)
        if size is None:
            self._state = PyramidState.EXHAUSTED
            logger.debug(
                f"Scale-space exhausted after octave {self._octave} "
                f"({self.width}x{self.height})"
            )
            return False
        width, height = size

        scales = self.octave_storage.scales
        scales[0].reshape(width, height)
        downsample(scales[1], scales[0])

        self.octave_storage.reshape(width, height)
        self._construct_rest_of_octave()

        self._octave += 1
        self._dog_ready = False

        logger.debug(
            f"Octave {self._octave} built: {width}x{height}, "
            f"pixel scale {self._pixel_scale}, prior sigma {self._prior_sigma_first_scale:.4f}"
        )
        return True

    def compute_scale_sigma(self, level: int) -> float:
        """
        Total amount of blur, relative to the input image, at the specified
        scale of the current octave
        """
        self._require_octave()
        if level < 0 or level >= self.num_scales:
            raise ValueError(f"Invalid scale index: {level}")
        return scale_sigma(
            self._prior_sigma_first_scale,
            self._pixel_scale,
            self.base_sigma,
            level
        )

    def compute_feature_intensity(self):
        """
        Compute the Difference of Gaussian feature intensity across the octave
        """
        self._require_octave()
        self.octave_storage.compute_dog(self.base_sigma)
        self._dog_ready = True

    def get_scale(self, index: int) -> np.ndarray:
        """
        Blurred image at a scale of the current octave
        """
        self._require_octave()
        if index < 0 or index >= self.num_scales:
            raise ValueError(f"Invalid scale index: {index}")
        return self.octave_storage.scales[index].data

    def get_dog(self, index: int) -> np.ndarray:
        """
        Difference of Gaussian image between scale index + 1 and index
        """
        self._require_octave()
        if index < 0 or index >= self.num_scales - 1:
            raise ValueError(f"Invalid DoG index: {index}")
        if not self._dog_ready:
            raise PyramidStateError(
                "compute_feature_intensity() has not been called for this octave"
            )
        return self.octave_storage.dogs[index].data

    def octave_info(self) -> OctaveInfo:
        self._require_octave()
        return OctaveInfo(
            index=self._octave,
            width=self.width,
            height=self.height,
            pixel_scale=self._pixel_scale,
            sigmas=[self.compute_scale_sigma(i) for i in range(self.num_scales)]
        )

    def snapshot(self, include_dog: bool = True) -> OctaveSnapshot:
        """
        Copy the current octave so it survives the next octave transition.

        The DoG images are included only if they have been computed.
        """
        info = self.octave_info()
        scales = [image.copy() for image in self.octave_storage.scales]
        dogs: List[np.ndarray] = []
        if include_dog and self._dog_ready:
            dogs = [image.copy() for image in self.octave_storage.dogs]
        return OctaveSnapshot(info=info, scales=scales, dogs=dogs)

    def _construct_rest_of_octave(self):
        """
        Using the first scale as seed, blur the remaining scales
        """
        scales = self.octave_storage.scales
        for i in range(1, len(scales)):
            amount = increment_sigma(self.base_sigma, i)
            self._blur(scales[i - 1], scales[i], amount)

    def _blur(self, src: ImageBuffer, dst: ImageBuffer, sigma: float):
        self.blur.apply(src, dst, sigma, self.octave_storage.storage)

    def _require_octave(self):
        if self._state is PyramidState.UNINITIALIZED:
            raise PyramidStateError("No octave has been processed")

    def _to_buffer(self, image: Union[np.ndarray, ImageBuffer]) -> ImageBuffer:
        if isinstance(image, ImageBuffer):
            # reshaping the octave would overwrite the input
            if self.octave_storage.owns(image):
                return ImageBuffer.from_array(image.data)
            return image

        image = np.asarray(image)
        # Convert to grayscale if needed
        if image.ndim == 3:
            image = np.mean(image, axis=2)
        if image.ndim != 2:
            raise ValueError(f"Unsupported image shape: {image.shape}")
        return ImageBuffer.from_array(image)
