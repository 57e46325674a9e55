"""
Field validation for books submitted to the API.
"""

import re
from typing import List

from library_api.models import Book, ValidationFailure

# 10 or 13 digits, optionally separated by hyphens
ISBN_PATTERN = re.compile(r"^(?=(?:\D*\d){10}(?:(?:\D*\d){3})?$)[\d-]+$")

INVALID_ISBN_MESSAGE = "Value was not a valid ISBN-13"


def _not_empty_message(property_name: str) -> str:
    return f"'{property_name}' must not be empty."


def _is_blank(value: str) -> bool:
    return not value or not value.strip()


class BookValidator:
    """Checks a book's field constraints without touching the store."""

    def validate(self, book: Book) -> List[ValidationFailure]:
        """
        Validate a book.

        Args:
            book: Book to check

        Returns:
            Field-level failures, empty when the book is valid
        """
        failures = []

        if not ISBN_PATTERN.fullmatch(book.isbn or ""):
            failures.append(ValidationFailure(property_name="Isbn", error_message=INVALID_ISBN_MESSAGE))

        if _is_blank(book.title):
            failures.append(ValidationFailure(property_name="Title", error_message=_not_empty_message("Title")))

        if _is_blank(book.author):
            failures.append(ValidationFailure(property_name="Author", error_message=_not_empty_message("Author")))

        return failures

    def is_valid(self, book: Book) -> bool:
        return not self.validate(book)
