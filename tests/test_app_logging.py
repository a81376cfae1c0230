"""Tests for logging configuration."""

import logging

import pytest

from hydration_reminder.app_logging import configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("hydration_reminder")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_repeated_setup_keeps_one_handler(package_logger: logging.Logger) -> None:
    configure_logging()
    configure_logging()

    assert len(package_logger.handlers) == 1
    assert package_logger.propagate is False


def test_level_is_applied_to_package_logger(package_logger: logging.Logger) -> None:
    configure_logging(logging.DEBUG)

    assert package_logger.level == logging.DEBUG
    assert logging.getLogger("hydration_reminder.services.reminders").isEnabledFor(
        logging.DEBUG
    )
