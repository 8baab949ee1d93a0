"""
Field-level validation for submitted books.

Rules run before the store is touched on create and update. Every failing rule
yields one ``ValidationFailure``; an empty list means the book is valid.
"""

import re

from .models import Book, ValidationFailure

# ASCII digits and hyphens only, with exactly 10 or 13 digits in total.
ISBN_PATTERN = re.compile(r"^(?=(?:\D*\d){10}(?:(?:\D*\d){3})?$)[\d-]+$", re.ASCII)

INVALID_ISBN_MESSAGE = "Invalid ISBN format"
DUPLICATE_ISBN_MESSAGE = "A book with the same ISBN already exists"


def is_valid_isbn(isbn: str) -> bool:
    return bool(ISBN_PATTERN.match(isbn))


def _is_blank(value: str) -> bool:
    return not value or not value.strip()


class BookValidator:
    """Checks a Book against the catalog's field rules."""

    def validate(self, book: Book) -> list[ValidationFailure]:
        failures: list[ValidationFailure] = []

        if not is_valid_isbn(book.isbn):
            failures.append(
                ValidationFailure(property_name="Isbn", error_message=INVALID_ISBN_MESSAGE)
            )

        if _is_blank(book.title):
            failures.append(
                ValidationFailure(property_name="Title", error_message="Title must not be empty")
            )

        if _is_blank(book.author):
            failures.append(
                ValidationFailure(property_name="Author", error_message="Author must not be empty")
            )

        if book.page_count <= 0:
            failures.append(
                ValidationFailure(
                    property_name="PageCount",
                    error_message="Page count must be greater than 0",
                )
            )

        return failures
