"""
Book service layer for the FastAPI application.
"""

import sqlite3
from typing import Dict, List, Optional

import structlog

from library_api.database import SqliteConnectionFactory
from library_api.models import Book

logger = structlog.get_logger(__name__)


class BookService:
    """CRUD and search operations on the Books table."""

    def __init__(self, connection_factory: SqliteConnectionFactory):
        self.connection_factory = connection_factory

    def create(self, book: Book) -> bool:
        """
        Insert a new book.

        Args:
            book: Book to insert

        Returns:
            True if created, False if a book with the same ISBN already exists
        """
        try:
            with self.connection_factory.connect() as connection:
                cursor = connection.execute(
                    "INSERT INTO Books (Isbn, Title, Author, ShortDescription, PageCount, ReleaseDate) "
                    "VALUES (:Isbn, :Title, :Author, :ShortDescription, :PageCount, :ReleaseDate) "
                    "ON CONFLICT(Isbn) DO NOTHING",
                    book.to_row()
                )
                created = cursor.rowcount > 0

        except sqlite3.Error as e:
            logger.error("Failed to create book", isbn=book.isbn, error=str(e))
            raise

        if created:
            logger.info("Book created", isbn=book.isbn)
        else:
            logger.info("Book already exists", isbn=book.isbn)
        return created

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """
        Get a single book by ISBN.

        Args:
            isbn: Book identifier

        Returns:
            Book if found, None otherwise
        """
        try:
            with self.connection_factory.connect() as connection:
                row = connection.execute(
                    "SELECT * FROM Books WHERE Isbn = :Isbn LIMIT 1",
                    {"Isbn": isbn}
                ).fetchone()

        except sqlite3.Error as e:
            logger.error("Failed to get book by ISBN", isbn=isbn, error=str(e))
            raise

        return Book(**dict(row)) if row is not None else None

    def get_all(self) -> List[Book]:
        """Get every book in store order."""
        try:
            with self.connection_factory.connect() as connection:
                rows = connection.execute("SELECT * FROM Books").fetchall()

        except sqlite3.Error as e:
            logger.error("Failed to get books", error=str(e))
            raise

        return [Book(**dict(row)) for row in rows]

    def search_by_title(self, search_term: str) -> List[Book]:
        """
        Get books whose title contains the search term.

        Matching follows the store's LIKE semantics, which in SQLite is
        case-insensitive for ASCII letters.

        Args:
            search_term: Substring to look for

        Returns:
            Matching books
        """
        try:
            with self.connection_factory.connect() as connection:
                rows = connection.execute(
                    "SELECT * FROM Books WHERE Title LIKE '%' || :SearchTerm || '%'",
                    {"SearchTerm": search_term}
                ).fetchall()

        except sqlite3.Error as e:
            logger.error("Failed to search books", search_term=search_term, error=str(e))
            raise

        return [Book(**dict(row)) for row in rows]

    def update(self, book: Book) -> bool:
        """
        Overwrite every non-key field of an existing book.

        Args:
            book: Book carrying the ISBN to update and the new values

        Returns:
            True if updated, False if no book has that ISBN
        """
        try:
            with self.connection_factory.connect() as connection:
                cursor = connection.execute(
                    "UPDATE Books SET Title = :Title, Author = :Author, "
                    "ShortDescription = :ShortDescription, PageCount = :PageCount, "
                    "ReleaseDate = :ReleaseDate WHERE Isbn = :Isbn",
                    book.to_row()
                )
                updated = cursor.rowcount > 0

        except sqlite3.Error as e:
            logger.error("Failed to update book", isbn=book.isbn, error=str(e))
            raise

        if updated:
            logger.info("Book updated", isbn=book.isbn)
        else:
            logger.info("Book to update not found", isbn=book.isbn)
        return updated

    def delete(self, isbn: str) -> bool:
        """
        Delete a book by ISBN.

        Returns:
            True if deleted, False if no book has that ISBN
        """
        try:
            with self.connection_factory.connect() as connection:
                cursor = connection.execute(
                    "DELETE FROM Books WHERE Isbn = :Isbn",
                    {"Isbn": isbn}
                )
                deleted = cursor.rowcount > 0

        except sqlite3.Error as e:
            logger.error("Failed to delete book", isbn=isbn, error=str(e))
            raise

        if deleted:
            logger.info("Book deleted", isbn=isbn)
        else:
            logger.info("Book to delete not found", isbn=isbn)
        return deleted

    def health_check(self) -> Dict:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        try:
            with self.connection_factory.connect() as connection:
                books_count = connection.execute("SELECT COUNT(*) FROM Books").fetchone()[0]

            return {
                "status": "healthy",
                "books_table": "accessible",
                "books_count": books_count
            }
        except sqlite3.Error as e:
            logger.error("Database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }
