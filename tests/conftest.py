"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from library_api.config import APIConfig
from library_api.database import DatabaseInitializer, SqliteConnectionFactory
from library_api.main import create_app
from library_api.models import Book
from library_api.services import BookService


@pytest.fixture
def database_path(tmp_path):
    """Path of a throwaway SQLite database."""
    return tmp_path / "library.db"


@pytest.fixture
def api_config(database_path):
    """API configuration pointing at the throwaway database."""
    return APIConfig(
        connection_string=f"Data Source={database_path}",
        require_api_key=False,
        api_key="test-api-key",
        log_format="console"
    )


@pytest.fixture
def connection_factory(database_path):
    """Connection factory with the Books table already created."""
    factory = SqliteConnectionFactory(str(database_path))
    DatabaseInitializer(factory).initialize()
    return factory


@pytest.fixture
def book_service(connection_factory):
    """Book service backed by the throwaway database."""
    return BookService(connection_factory)


@pytest.fixture
def sample_book():
    """Create sample book for testing."""
    return Book(
        isbn="123-1231231230",
        title="Learning Python by Samples",
        author="Federico",
        short_description="Find your own path to Python with the latest samples!",
        page_count=444,
        release_date=date(2023, 1, 1)
    )


@pytest.fixture
def sample_book_json(sample_book):
    """Sample book as sent over the wire."""
    return sample_book.model_dump(by_alias=True, mode="json")


@pytest.fixture
def client(api_config):
    """Create test client; the context manager runs the app lifespan."""
    app = create_app(api_config)
    with TestClient(app) as test_client:
        yield test_client
