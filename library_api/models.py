"""
API models and schemas for the FastAPI application.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value a SQLite INTEGER column can hold
SQLITE_MAX_INTEGER = 2 ** 63 - 1


class Book(BaseModel):
    """A catalog entry, keyed by ISBN.

    Field names follow the store columns and the JSON wire format
    (``Isbn``, ``Title``...); the snake_case attribute names are accepted too.
    """

    model_config = ConfigDict(populate_by_name=True)

    isbn: str = Field("", alias="Isbn", description="ISBN-13, the primary key")
    title: str = Field("", alias="Title", description="Book title")
    author: str = Field("", alias="Author", description="Book author")
    short_description: str = Field("", alias="ShortDescription", description="Short description")
    page_count: Optional[int] = Field(
        None, ge=0, le=SQLITE_MAX_INTEGER, alias="PageCount", description="Number of pages"
    )
    release_date: date = Field(..., alias="ReleaseDate", description="Release date")

    @field_validator("isbn", "title", "author", "short_description", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """Treat JSON null text fields as empty so the book validator reports them."""
        return "" if v is None else v

    def to_row(self) -> dict:
        """Column/value mapping used as named SQL parameters."""
        return self.model_dump(by_alias=True, mode="json")


class ValidationFailure(BaseModel):
    """A single field-level validation error."""

    model_config = ConfigDict(populate_by_name=True)

    property_name: str = Field(..., alias="PropertyName", description="Offending field")
    error_message: str = Field(..., alias="ErrorMessage", description="Human-readable message")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    database_status: str = Field(..., description="Database connection status")
