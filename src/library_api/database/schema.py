"""
SQLAlchemy schema for the Library API.

A single ``Books`` table keyed by ISBN. Column names match the table layout
shared with other tools reading the same database file, so the Python
attribute names are mapped onto PascalCase columns explicitly.
"""

from datetime import date

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


class IsoDate(TypeDecorator):
    """Stores a ``date`` as an ISO-8601 TEXT value (``YYYY-MM-DD``)."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):  # noqa: ARG002
        if value is None:
            return None
        if isinstance(value, date):
            return value.isoformat()
        return str(value)

    def process_result_value(self, value, dialect):  # noqa: ARG002
        if value is None:
            return None
        # Tolerate rows written with a time component ("2024-01-01T00:00:00")
        return date.fromisoformat(value[:10])


class Book(Base):
    """Books table - the library's catalog."""

    __tablename__ = "Books"

    isbn = Column("Isbn", Text, primary_key=True)
    title = Column("Title", Text, nullable=False)
    author = Column("Author", Text, nullable=False)
    short_description = Column("ShortDescription", Text, nullable=False)
    page_count = Column("PageCount", Integer, nullable=False)
    release_date = Column("ReleaseDate", IsoDate, nullable=False)

    def __repr__(self) -> str:
        return f"<Book(isbn='{self.isbn}', title='{self.title}')>"
