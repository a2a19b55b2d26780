"""
Tests for the command line tool
"""

import json
import logging

import pytest

import scale_space
from scalespace.core.schedule import plan_octaves
from scalespace.models.config import PyramidConfig


@pytest.fixture(autouse=True)
def restore_logging():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_plan_to_file(tmp_path):
    output = tmp_path / "plan" / "schedule.json"
    status = scale_space.main([
        "plan", "--width", "64", "--height", "48",
        "--num-scales", "4", "--output", str(output)
    ])

    assert status == 0
    schedule = json.loads(output.read_text())
    expected = plan_octaves(64, 48, PyramidConfig(4, 1.6, False))
    assert schedule['config']['num_scales'] == 4
    assert schedule['input_size'] == [64, 48]
    assert [o['width'] for o in schedule['octaves']] == [o.width for o in expected]
    assert schedule['octaves'][0]['sigmas'] == pytest.approx(expected[0].sigmas)


def test_plan_to_stdout(capsys):
    status = scale_space.main(["plan", "--width", "10", "--height", "10", "--double-input"])

    assert status == 0
    schedule = json.loads(capsys.readouterr().out)
    assert schedule['octaves'][0]['width'] == 20
    assert schedule['octaves'][0]['pixel_scale'] == 0.5


def test_invalid_configuration():
    status = scale_space.main(["plan", "--width", "10", "--height", "10", "--num-scales", "2"])
    assert status == 1


def test_bench(tmp_path):
    log_file = tmp_path / "bench.log"
    status = scale_space.main([
        "--log-file", str(log_file),
        "bench", "--width", "24", "--height", "16", "--repeat", "2", "--num-threads", "1"
    ])

    assert status == 0
    assert "Total time" in log_file.read_text()


def test_missing_command():
    assert scale_space.main([]) == 1
