"""
Book repository implementation for the Library API.

Each method opens its own session through ``store_scope`` and closes it before
returning, so no connection is held across operations. Results are returned as
Pydantic ``Book`` models, ready for JSON serialization.
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from ..database.schema import Book as BookDB
from ..models.book import Book as BookModel
from .repository import RepositoryError, store_scope
from .session import DatabaseManager

logger = logging.getLogger(__name__)


def _to_model(row: BookDB) -> BookModel:
    return BookModel(
        isbn=row.isbn,
        title=row.title,
        author=row.author,
        short_description=row.short_description,
        page_count=row.page_count,
        release_date=row.release_date,
    )


def _to_row(book: BookModel) -> BookDB:
    return BookDB(
        isbn=book.isbn,
        title=book.title,
        author=book.author,
        short_description=book.short_description,
        page_count=book.page_count,
        release_date=book.release_date,
    )


class BookRepository:
    """
    Repository for book data access.

    Mutations report "no such book" / "already exists" through their boolean
    result; only unexpected database failures raise ``RepositoryError``.
    """

    def __init__(self, db: DatabaseManager):
        """Initialize repository with a connection provider."""
        self.db = db

    def create(self, book: BookModel) -> bool:
        """
        Insert a new book.

        Returns:
            False if a book with the same ISBN already exists, True otherwise
        """
        try:
            with store_scope(self.db, "create book") as session:
                if session.get(BookDB, book.isbn) is not None:
                    logger.info("Book %s already exists, not creating", book.isbn)
                    return False
                session.add(_to_row(book))
        except RepositoryError as e:
            # A concurrent insert of the same ISBN won the race
            if isinstance(e.__cause__, IntegrityError):
                logger.warning("Duplicate ISBN %s rejected by the database", book.isbn)
                return False
            raise

        logger.info("Created book %s", book.isbn)
        return True

    def get_by_isbn(self, isbn: str) -> BookModel | None:
        """
        Get book by ISBN.

        Returns:
            Book model or None if not found
        """
        with store_scope(self.db, "get book by ISBN") as session:
            query = select(BookDB).where(BookDB.isbn == isbn).limit(1)
            row = session.execute(query).scalar_one_or_none()
            return _to_model(row) if row is not None else None

    def get_all(self) -> list[BookModel]:
        """Return every book in the catalog, in no particular order."""
        with store_scope(self.db, "list books") as session:
            rows = session.execute(select(BookDB)).scalars().all()
            return [_to_model(row) for row in rows]

    def search_by_title(self, search_term: str) -> list[BookModel]:
        """
        Find books whose title contains ``search_term``.

        Matching uses SQL ``LIKE '%term%'``; on SQLite this ignores ASCII case.
        """
        query = select(BookDB).where(BookDB.title.like(f"%{search_term}%"))
        with store_scope(self.db, "search books by title") as session:
            rows = session.execute(query).scalars().all()
            return [_to_model(row) for row in rows]

    def update(self, book: BookModel) -> bool:
        """
        Overwrite every non-key field of an existing book.

        Returns:
            False if no book has ``book.isbn``; nothing is inserted in that case
        """
        statement = (
            update(BookDB)
            .where(BookDB.isbn == book.isbn)
            .values(
                {
                    BookDB.title: book.title,
                    BookDB.author: book.author,
                    BookDB.short_description: book.short_description,
                    BookDB.page_count: book.page_count,
                    BookDB.release_date: book.release_date,
                }
            )
        )
        with store_scope(self.db, "update book") as session:
            updated = session.execute(statement).rowcount > 0

        if updated:
            logger.info("Updated book %s", book.isbn)
        return updated

    def delete(self, isbn: str) -> bool:
        """
        Delete a book by ISBN.

        Returns:
            True if deleted, False if not found
        """
        with store_scope(self.db, "delete book") as session:
            deleted = session.execute(delete(BookDB).where(BookDB.isbn == isbn)).rowcount > 0

        if deleted:
            logger.info("Deleted book %s", isbn)
        return deleted
