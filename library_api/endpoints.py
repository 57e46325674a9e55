"""
Book endpoints.
"""

from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from library_api.auth import verify_api_key
from library_api.models import Book, ValidationFailure
from library_api.services import BookService
from library_api.validation import BookValidator

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    dependencies=[Depends(verify_api_key)]
)


def get_book_service(request: Request) -> BookService:
    return request.app.state.book_service


def get_validator(request: Request) -> BookValidator:
    return request.app.state.validator


def _book_content(book: Book) -> dict:
    return book.model_dump(by_alias=True, mode="json")


def _failures_response(failures: List[ValidationFailure]) -> JSONResponse:
    logger.info(
        "Book rejected",
        failures=[failure.property_name for failure in failures]
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=[failure.model_dump(by_alias=True) for failure in failures]
    )


@router.get("", response_model=List[Book], name="GetBooks")
def get_books(
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    book_service: BookService = Depends(get_book_service)
):
    """
    Get all books, or the books whose title contains a search term.

    - **searchTerm**: Optional title substring
    """
    if search_term and search_term.strip():
        books = book_service.search_by_title(search_term)
    else:
        books = book_service.get_all()

    return JSONResponse(content=[_book_content(book) for book in books])


@router.get(
    "/{isbn}",
    response_model=Book,
    name="GetBook",
    responses={404: {"description": "Book not found"}}
)
def get_book(isbn: str, book_service: BookService = Depends(get_book_service)):
    """Get a single book by ISBN."""
    book = book_service.get_by_isbn(isbn)

    if book is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return JSONResponse(content=_book_content(book))


@router.post(
    "",
    response_model=Book,
    status_code=status.HTTP_201_CREATED,
    name="CreateBook",
    responses={400: {"description": "Validation failed or ISBN already exists"}}
)
def create_book(
    book: Book,
    book_service: BookService = Depends(get_book_service),
    validator: BookValidator = Depends(get_validator)
):
    """Create a book. The ISBN must not exist yet."""
    failures = validator.validate(book)
    if failures:
        return _failures_response(failures)

    if not book_service.create(book):
        return _failures_response([
            ValidationFailure(
                property_name="Isbn",
                error_message=f"A book with ISBN-13 {book.isbn} already exists"
            )
        ])

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=_book_content(book),
        headers={"Location": f"/books/{book.isbn}"}
    )


@router.put(
    "/{isbn}",
    response_model=Book,
    name="UpdateBook",
    responses={400: {"description": "Validation failed"}, 404: {"description": "Book not found"}}
)
def update_book(
    isbn: str,
    book: Book,
    book_service: BookService = Depends(get_book_service),
    validator: BookValidator = Depends(get_validator)
):
    """Update a book. The ISBN in the path wins over the one in the body."""
    book = book.model_copy(update={"isbn": isbn})

    failures = validator.validate(book)
    if failures:
        return _failures_response(failures)

    if not book_service.update(book):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return JSONResponse(content=_book_content(book))


@router.delete(
    "/{isbn}",
    status_code=status.HTTP_204_NO_CONTENT,
    name="DeleteBook",
    responses={404: {"description": "Book not found"}}
)
def delete_book(isbn: str, book_service: BookService = Depends(get_book_service)):
    """Delete a book by ISBN."""
    if not book_service.delete(isbn):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
