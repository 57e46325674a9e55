"""
Tests for the logging setup.
"""

import logging

import pytest
import structlog

from utilities.logger import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    structlog.reset_defaults()


def test_json_logs_written_to_file(tmp_path):
    log_file = tmp_path / "logs" / "api.log"
    setup_logging(log_level="INFO", log_format="json", log_file=log_file)

    get_logger("tests").info("Book created", isbn="123-1231231230")

    content = log_file.read_text()
    assert '"event": "Book created"' in content
    assert '"isbn": "123-1231231230"' in content


def test_level_filters_file_output(tmp_path):
    log_file = tmp_path / "api.log"
    setup_logging(log_level="WARNING", log_format="console", log_file=str(log_file))

    get_logger("tests").info("Hidden event")
    get_logger("tests").warning("Visible event")

    content = log_file.read_text()
    assert "Hidden event" not in content
    assert "Visible event" in content
