"""
Octave iteration and batch construction of scale-spaces
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Optional, Union

import numpy as np
from tqdm import tqdm

from ..models.config import PyramidConfig
from ..models.image import ImageBuffer
from ..models.octave import OctaveSnapshot
from .pyramid import ScaleSpacePyramid


logger = logging.getLogger(__name__)


def iter_octaves(
    pyramid: ScaleSpacePyramid,
    image: Union[np.ndarray, ImageBuffer],
    compute_dog: bool = True
) -> Iterator[ScaleSpacePyramid]:
    """
    Yield the pyramid once for every octave of the image.

    The yielded pyramid is overwritten when iteration resumes, so consume or
    snapshot its images before asking for the next octave.
    """
    pyramid.process(image)
    while True:
        if compute_dog:
            pyramid.compute_feature_intensity()
        yield pyramid
        if not pyramid.compute_next_octave():
            break


def build_scale_space(
    image: Union[np.ndarray, ImageBuffer],
    config: PyramidConfig,
    include_dog: bool = True
) -> List[OctaveSnapshot]:
    """
    Compute every octave of an image and keep a copy of each
    """
    pyramid = ScaleSpacePyramid.from_config(config)
    return [
        octave.snapshot(include_dog)
        for octave in iter_octaves(pyramid, image, compute_dog=include_dog)
    ]


class ScaleSpaceBatch:
    """
    Builds the scale-space of many images, one pyramid per image
    """

    def __init__(
        self,
        config: Optional[PyramidConfig] = None,
        num_threads: Optional[int] = None,
        include_dog: bool = True,
        show_progress: bool = True
    ):
        self.config = config if config is not None else PyramidConfig()
        self.num_threads = num_threads
        self.include_dog = include_dog
        self.show_progress = show_progress

    def process(
        self,
        images: List[Union[np.ndarray, ImageBuffer]]
    ) -> List[List[OctaveSnapshot]]:
        """
        Scale-spaces of all images, in the same order as the input
        """
        logger.info(f"Building scale-space of {len(images)} images")

        progress = tqdm(
            total=len(images),
            desc="Building scale-spaces",
            disable=not self.show_progress
        )

        def build(image):
            octaves = build_scale_space(image, self.config, self.include_dog)
            progress.update(1)
            return octaves

        try:
            if self.num_threads == 1:
                results = [build(image) for image in images]
            else:
                with ThreadPoolExecutor(max_workers=self.num_threads) as executor:
                    results = list(executor.map(build, images))
        finally:
            progress.close()

        total_octaves = sum(len(octaves) for octaves in results)
        logger.info(f"Built {total_octaves} octaves")
        return results
