import logging

import pytest

from impact_sim.core.logging_utils import LOGGER_NAME, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_level_by_name(package_logger):
    setup_logging("debug")
    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1


def test_repeated_setup_does_not_duplicate(package_logger):
    setup_logging()
    setup_logging()
    assert len(package_logger.handlers) == 1


def test_file_handler_receives_records(package_logger, tmp_path):
    log_file = tmp_path / "impact.log"
    setup_logging(logging.INFO, log_file)
    logging.getLogger("impact_sim.control.controller").info("Run %d started", 1)
    for handler in package_logger.handlers:
        handler.flush()
    assert "impact_sim.control.controller - INFO - Run 1 started" in log_file.read_text(encoding="utf-8")


def test_unknown_level_rejected(package_logger):
    with pytest.raises(ValueError):
        setup_logging("chatty")
