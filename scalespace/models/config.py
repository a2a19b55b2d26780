"""
Scale-space configuration and change notification
"""

import logging
from dataclasses import dataclass, replace, asdict
from typing import Any, Callable, Dict, List, Optional


logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a pyramid is configured with unusable parameters"""


@dataclass(frozen=True)
class PyramidConfig:
    """Parameters of a scale-space pyramid"""
    num_scales: int = 5
    base_sigma: float = 1.6
    double_input_image: bool = False

    def __post_init__(self):
        if self.num_scales < 3:
            raise ConfigurationError("A minimum of 3 scales are required")
        if not self.base_sigma > 0:
            raise ConfigurationError(f"base_sigma must be positive, got {self.base_sigma}")

    @property
    def num_dog(self) -> int:
        """Number of Difference of Gaussian images per octave"""
        return self.num_scales - 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


ConfigListener = Callable[[PyramidConfig], None]


class ConfigController:
    """
    Holds the active configuration and notifies listeners when it changes.

    Stands in for an interactive tuning panel: any front end can call
    ``update`` and every subscribed pyramid is reconfigured.
    """

    def __init__(self, config: Optional[PyramidConfig] = None):
        self._config = config if config is not None else PyramidConfig()
        self._listeners: List[ConfigListener] = []

    @property
    def config(self) -> PyramidConfig:
        return self._config

    def subscribe(self, listener: ConfigListener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ConfigListener):
        self._listeners.remove(listener)

    def update(self, **changes) -> PyramidConfig:
        """
        Apply changes to the configuration.

        Raises ConfigurationError and keeps the old configuration if the
        result is invalid. Listeners are only called when something changed.
        """
        new_config = replace(self._config, **changes)
        if new_config == self._config:
            return self._config

        logger.debug(f"Configuration changed: {self._config} -> {new_config}")
        self._config = new_config
        for listener in list(self._listeners):
            listener(new_config)
        return new_config
