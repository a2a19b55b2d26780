"""
Sigma bookkeeping across octaves
"""

import math
from typing import List, Optional, Tuple

from ..models.config import PyramidConfig
from ..models.octave import OctaveInfo


# Octaves with a side smaller than this are not built
MIN_OCTAVE_SIZE = 3


def compose_sigma(a: float, b: float) -> float:
    """
    Sigma of a Gaussian blur of sigma a followed by one of sigma b
    """
    return math.sqrt(a * a + b * b)


def scale_sigma(
    prior_sigma: float,
    pixel_scale: float,
    base_sigma: float,
    level: int
) -> float:
    """
    Total blur, in input image pixels, at a scale level of an octave.

    prior_sigma is the blur already present in the octave's first image
    before the octave was constructed.
    """
    return compose_sigma(prior_sigma, pixel_scale * base_sigma * (level + 1))


def increment_sigma(base_sigma: float, level: int) -> float:
    """
    Blur which turns scale level - 1 into scale level inside an octave
    """
    sigma_a = base_sigma * level
    sigma_b = base_sigma * (level + 1)
    return math.sqrt(sigma_b * sigma_b - sigma_a * sigma_a)


def next_octave_size(width: int, height: int) -> Optional[Tuple[int, int]]:
    """
    Size of the next octave, or None if it would be too small
    """
    width //= 2
    height //= 2
    if width < MIN_OCTAVE_SIZE or height < MIN_OCTAVE_SIZE:
        return None
    return width, height


def plan_octaves(width: int, height: int, config: PyramidConfig) -> List[OctaveInfo]:
    """
    Describe every octave a pyramid builds for an input of the given size
    """
    if config.double_input_image:
        width, height = width * 2, height * 2
        pixel_scale = 0.5
    else:
        pixel_scale = 1.0

    if width < MIN_OCTAVE_SIZE or height < MIN_OCTAVE_SIZE:
        raise ValueError(f"Input image is too small: {width}x{height}")

    octaves = []
    prior_sigma = 0.0
    size = (width, height)
    while size is not None:
        sigmas = [
            scale_sigma(prior_sigma, pixel_scale, config.base_sigma, level)
            for level in range(config.num_scales)
        ]
        octaves.append(OctaveInfo(
            index=len(octaves),
            width=size[0],
            height=size[1],
            pixel_scale=pixel_scale,
            sigmas=sigmas
        ))

        size = next_octave_size(*size)
        prior_sigma = sigmas[1]
        pixel_scale *= 2

    return octaves
