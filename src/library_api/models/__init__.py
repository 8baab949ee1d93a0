"""
Library API models.

Pydantic models for the request and response bodies of the HTTP API:
- Book: a catalog record
- BookUpdate: a PUT body, whose ISBN comes from the URL
- ValidationFailure: one entry of a 400 response body
"""

from .book import Book, BookUpdate
from .errors import ValidationFailure

__all__ = [
    "Book",
    "BookUpdate",
    "ValidationFailure",
]
