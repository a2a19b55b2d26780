"""
Octave description models
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import numpy as np


@dataclass
class OctaveInfo:
    """Geometry and blur of one octave, independent of pixel data"""
    index: int
    width: int
    height: int
    pixel_scale: float
    sigmas: List[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'index': self.index,
            'width': self.width,
            'height': self.height,
            'pixel_scale': self.pixel_scale,
            'sigmas': list(self.sigmas)
        }


@dataclass
class OctaveSnapshot:
    """Copy of an octave's images that survives later octave transitions"""
    info: OctaveInfo
    scales: List[np.ndarray]
    dogs: List[np.ndarray] = field(default_factory=list)

    @property
    def has_dog(self) -> bool:
        return len(self.dogs) > 0

    def to_original(self, x: float, y: float) -> Tuple[float, float]:
        """Map a coordinate in this octave to the input image"""
        return (x * self.info.pixel_scale, y * self.info.pixel_scale)
