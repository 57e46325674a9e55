"""
Tests for connection handling and schema setup.
"""

import sqlite3

import pytest

from library_api.database import (
    DatabaseInitializer,
    SqliteConnectionFactory,
    parse_connection_string,
)


@pytest.mark.parametrize("connection_string, expected", [
    ("library.db", "library.db"),
    ("Data Source=library.db", "library.db"),
    ("data source = ./data/library.db ", "./data/library.db"),
    ("Data Source=library.db;Cache=Shared", "library.db"),
    ("Mode=ReadWrite;DataSource=other.db", "other.db"),
])
def test_parse_connection_string(connection_string, expected):
    assert parse_connection_string(connection_string) == expected


@pytest.mark.parametrize("connection_string", ["", "   ", "Cache=Shared", "Data Source="])
def test_parse_connection_string_rejects_missing_path(connection_string):
    with pytest.raises(ValueError):
        parse_connection_string(connection_string)


def test_initializer_creates_books_table(database_path):
    factory = SqliteConnectionFactory(f"Data Source={database_path}")
    DatabaseInitializer(factory).initialize()

    with factory.connect() as connection:
        columns = [row["name"] for row in connection.execute("PRAGMA table_info(Books)")]

    assert columns == ["Isbn", "Title", "Author", "ShortDescription", "PageCount", "ReleaseDate"]


def test_initializer_is_idempotent(connection_factory):
    with connection_factory.connect() as connection:
        connection.execute(
            "INSERT INTO Books VALUES ('123-1231231230', 'T', 'A', 'D', 1, '2023-01-01')"
        )

    DatabaseInitializer(connection_factory).initialize()

    with connection_factory.connect() as connection:
        assert connection.execute("SELECT COUNT(*) FROM Books").fetchone()[0] == 1


def test_initializer_propagates_errors(tmp_path):
    factory = SqliteConnectionFactory(str(tmp_path / "missing" / "library.db"))
    with pytest.raises(sqlite3.OperationalError):
        DatabaseInitializer(factory).initialize()


def test_connection_rolls_back_on_error(connection_factory):
    with pytest.raises(RuntimeError):
        with connection_factory.connect() as connection:
            connection.execute(
                "INSERT INTO Books VALUES ('123-1231231230', 'T', 'A', 'D', 1, '2023-01-01')"
            )
            raise RuntimeError("boom")

    with connection_factory.connect() as connection:
        assert connection.execute("SELECT COUNT(*) FROM Books").fetchone()[0] == 0


def test_isbn_is_primary_key(connection_factory):
    insert = "INSERT INTO Books VALUES ('123-1231231230', 'T', 'A', 'D', 1, '2023-01-01')"
    with connection_factory.connect() as connection:
        connection.execute(insert)

    with pytest.raises(sqlite3.IntegrityError):
        with connection_factory.connect() as connection:
            connection.execute(insert)
