import logging

import pytest

import wirebox
from wirebox import Container, ConventionContainer, configuration
from wirebox.constants import LOGGER_NAME

log_capture: list[str] = []


class ListLogHandler(logging.Handler):
    def emit(self, record):
        log_capture.append(self.format(record))


@pytest.fixture(autouse=True)
def reset_logging_capture():
    log_capture.clear()


@pytest.fixture(autouse=True)
def reset_default_container():
    wirebox.reset()
    yield
    wirebox.reset()


@pytest.fixture
def captured_logs():
    logger = logging.getLogger(LOGGER_NAME)
    handler = ListLogHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield log_capture
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


@pytest.fixture
def ioc():
    return Container()


@pytest.fixture
def conventions():
    return ConventionContainer(configuration(default_prefix="acmewire", rules={"kitwire": "/"}))
