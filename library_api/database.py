"""
SQLite connection handling and schema setup.
"""

import sqlite3
from contextlib import contextmanager
from typing import Iterator

import structlog

logger = structlog.get_logger(__name__)

CREATE_BOOKS_TABLE = (
    "CREATE TABLE IF NOT EXISTS Books ("
    "Isbn TEXT PRIMARY KEY, "
    "Title TEXT NOT NULL, "
    "Author TEXT NOT NULL, "
    "ShortDescription TEXT NOT NULL, "
    "PageCount INTEGER, "
    "ReleaseDate TEXT NOT NULL)"
)


def parse_connection_string(connection_string: str) -> str:
    """
    Extract the database path from a connection string.

    Accepts a bare file path or ``key=value`` pairs separated by ``;``
    where ``Data Source`` names the file.

    Args:
        connection_string: Connection string or plain path

    Returns:
        Path of the SQLite database file

    Raises:
        ValueError: If no database path can be found
    """
    value = connection_string.strip()
    if "=" not in value:
        if not value:
            raise ValueError("Connection string is empty")
        return value

    for part in value.split(";"):
        key, _, item = part.partition("=")
        if key.strip().lower() in ("data source", "datasource", "filename"):
            if item.strip():
                return item.strip()

    raise ValueError(f"Connection string has no 'Data Source': {connection_string!r}")


class SqliteConnectionFactory:
    """Opens a fresh SQLite connection per unit of work."""

    def __init__(self, connection_string: str, timeout: float = 5.0):
        self.connection_string = connection_string
        self.database_path = parse_connection_string(connection_string)
        self.timeout = timeout

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """
        Open a connection for the duration of a ``with`` block.

        Commits when the block succeeds, rolls back when it raises and
        closes the handle either way.
        """
        connection = sqlite3.connect(self.database_path, timeout=self.timeout)
        connection.row_factory = sqlite3.Row
        try:
            with connection:
                yield connection
        finally:
            connection.close()


class DatabaseInitializer:
    """Creates the Books table at startup."""

    def __init__(self, connection_factory: SqliteConnectionFactory):
        self.connection_factory = connection_factory

    def initialize(self) -> None:
        try:
            with self.connection_factory.connect() as connection:
                connection.execute(CREATE_BOOKS_TABLE)
            logger.info("Database schema ready", database=self.connection_factory.database_path)
        except sqlite3.Error as e:
            logger.error(
                "Failed to initialize database",
                database=self.connection_factory.database_path,
                error=str(e)
            )
            raise
