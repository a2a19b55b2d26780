"""
Tests for pyramid configuration and change notification
"""

import pytest

from scalespace.core.pyramid import PyramidState, ScaleSpacePyramid
from scalespace.models.config import ConfigController, ConfigurationError, PyramidConfig


def test_defaults():
    config = PyramidConfig()
    assert config.num_scales == 5
    assert config.base_sigma == 1.6
    assert not config.double_input_image
    assert config.num_dog == 4


@pytest.mark.parametrize("num_scales, base_sigma", [(2, 1.6), (0, 1.6), (3, 0.0), (3, -1.0)])
def test_invalid(num_scales, base_sigma):
    with pytest.raises(ConfigurationError):
        PyramidConfig(num_scales=num_scales, base_sigma=base_sigma)


def test_to_dict():
    assert PyramidConfig(3, 2.0, True).to_dict() == {
        'num_scales': 3,
        'base_sigma': 2.0,
        'double_input_image': True
    }


class TestConfigController:

    def test_update_notifies_listeners(self):
        controller = ConfigController()
        received = []
        controller.subscribe(received.append)

        config = controller.update(num_scales=6)

        assert config.num_scales == 6
        assert controller.config is config
        assert received == [config]

    def test_unchanged_update_is_silent(self):
        controller = ConfigController(PyramidConfig(4))
        received = []
        controller.subscribe(received.append)

        controller.update(num_scales=4)

        assert received == []

    def test_invalid_update_keeps_config(self):
        controller = ConfigController()
        received = []
        controller.subscribe(received.append)

        with pytest.raises(ConfigurationError):
            controller.update(num_scales=2)

        assert controller.config == PyramidConfig()
        assert received == []

    def test_unsubscribe(self):
        controller = ConfigController()
        received = []
        controller.subscribe(received.append)
        controller.unsubscribe(received.append)

        controller.update(base_sigma=2.0)

        assert received == []

    def test_reconfigures_pyramid(self):
        controller = ConfigController(PyramidConfig(3))
        pyramid = ScaleSpacePyramid.from_config(controller.config)
        controller.subscribe(pyramid.apply_config)
        pyramid.process([[0.0] * 8] * 8)

        controller.update(num_scales=5, double_input_image=True)

        assert pyramid.num_scales == 5
        assert pyramid.double_input_image
        assert pyramid.state is PyramidState.UNINITIALIZED
