"""
Tests for logging setup
"""

import logging

import pytest

from scalespace.utils.logging import PACKAGE_LOGGER, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    levels = {
        name: logging.getLogger(name).level
        for name in ('', PACKAGE_LOGGER, 'concurrent.futures')
    }
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def test_package_level_defaults_to_level():
    logger = setup_logging(logging.WARNING)

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_package_debug_without_library_debug(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    setup_logging(logging.INFO, log_file, package_level=logging.DEBUG)

    logging.getLogger('scalespace.core.pyramid').debug("octave built")
    logging.getLogger('somelibrary').debug("library detail")
    logging.getLogger('concurrent.futures').info("pool detail")

    text = log_file.read_text()
    assert "octave built" in text
    assert "library detail" not in text
    assert "pool detail" not in text
