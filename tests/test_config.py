"""
Tests for API configuration.
"""

import pytest
from pydantic import ValidationError

from library_api.config import APIConfig


def test_defaults():
    config = APIConfig(_env_file=None)
    assert config.connection_string == "Data Source=library.db"
    assert config.require_api_key is False
    assert config.api_key_header == "Authorization"
    assert config.get_log_file_path() is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("CONNECTION_STRING", "Data Source=/tmp/books.db")
    monkeypatch.setenv("REQUIRE_API_KEY", "true")
    monkeypatch.setenv("API_KEY", "secret")

    config = APIConfig(_env_file=None)
    assert config.connection_string == "Data Source=/tmp/books.db"
    assert config.require_api_key is True
    assert config.api_key == "secret"


def test_log_settings_are_normalized():
    config = APIConfig(log_level="debug", log_format="CONSOLE", log_file="logs/api.log")
    assert config.log_level == "DEBUG"
    assert config.log_format == "console"
    assert str(config.get_log_file_path()) == "logs/api.log"


@pytest.mark.parametrize("field, value", [
    ("log_level", "VERBOSE"),
    ("log_format", "xml"),
    ("port", 0),
    ("database_timeout", 0),
])
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        APIConfig(**{field: value})
