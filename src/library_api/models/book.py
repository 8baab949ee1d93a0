"""
Book model for the Library API.

This is the JSON shape of a catalog record. Field names are snake_case in
Python and camelCase on the wire (``shortDescription``, ``pageCount``,
``releaseDate``).

The model only checks types. ``pageCount`` is a 32-bit integer so it always
fits the ``PageCount`` column. Business rules such as the ISBN format live in
``library_api.validation`` so they can be reported as field/message pairs.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class Book(BaseModel):
    """Represents a book in the library catalog."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "isbn": "978-0134685479",
                "title": "Effective Java",
                "author": "Joshua Bloch",
                "shortDescription": "Best practices for the Java platform",
                "pageCount": 412,
                "releaseDate": "2017-12-27",
            }
        },
    )

    isbn: str = Field(
        ...,
        description="ISBN-10 or ISBN-13, optionally hyphenated",
        examples=["978-0134685479", "0134685997"],
    )

    title: str = Field(..., description="The title of the book")

    author: str = Field(..., description="Name of the book's author")

    short_description: str = Field(..., description="Brief summary of the book")

    page_count: int = Field(
        ...,
        ge=INT32_MIN,
        le=INT32_MAX,
        description="Number of pages",
    )

    release_date: date = Field(..., description="Date the book was released")


class BookUpdate(Book):
    """Body of a PUT; the ISBN in the path replaces whatever the body carries."""

    isbn: str | None = Field(
        default=None,
        description="Ignored; the ISBN in the URL identifies the book",
    )

    def to_book(self, isbn: str) -> Book:
        return Book(**{**self.model_dump(), "isbn": isbn})
