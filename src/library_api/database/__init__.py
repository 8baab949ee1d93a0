"""
Database package for the Library API.

This package provides:
- SQLAlchemy schema for the Books table (schema.py)
- Session management and schema initialization (session.py)
- The book repository used by the HTTP layer (book_repository.py)
"""

from .book_repository import BookRepository
from .repository import BookStore, RepositoryError, store_scope
from .schema import Base, Book
from .session import DatabaseManager

__all__ = [
    "Base",
    "Book",
    "BookRepository",
    "BookStore",
    "DatabaseManager",
    "RepositoryError",
    "store_scope",
]
