"""
Repository plumbing shared by the data access layer.

The HTTP layer depends on the ``BookStore`` protocol rather than on a concrete
repository, so tests and alternative backends can be passed in directly.
Unexpected database failures surface as ``RepositoryError``; "not found" and
"already exists" are ordinary return values, not exceptions.
"""

import logging
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Book
from .session import DatabaseManager

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Raised when the backing store fails unexpectedly."""


class BookStore(Protocol):
    """Persistence operations the HTTP layer needs."""

    def create(self, book: Book) -> bool: ...

    def get_by_isbn(self, isbn: str) -> Book | None: ...

    def get_all(self) -> Sequence[Book]: ...

    def search_by_title(self, search_term: str) -> Sequence[Book]: ...

    def update(self, book: Book) -> bool: ...

    def delete(self, isbn: str) -> bool: ...


@contextmanager
def store_scope(db: DatabaseManager, operation: str) -> Generator[Session, None, None]:
    """
    Open a session for a single store operation.

    Args:
        db: Connection provider
        operation: Description of the operation (for error messages)

    Raises:
        RepositoryError: If any statement or the commit fails
    """
    try:
        with db.session_scope() as session:
            yield session
    except SQLAlchemyError as e:
        raise RepositoryError(f"Database operation '{operation}' failed: {e!s}") from e
