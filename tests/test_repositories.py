"""
Tests for the book repository.

Each repository call opens and closes its own session, so these tests only
ever talk to the repository and read results back through it.
"""

from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from library_api.database import Book as BookDB
from library_api.database import BookRepository, DatabaseManager, RepositoryError


class TestCreate:
    def test_create_then_get_returns_equal_book(self, repository, book_factory):
        book = book_factory()

        assert repository.create(book) is True
        assert repository.get_by_isbn(book.isbn) == book

    def test_create_is_not_idempotent(self, repository, book_factory):
        book = book_factory(title="Original")
        repository.create(book)

        duplicate = book_factory(isbn=book.isbn, title="Replacement")
        assert repository.create(duplicate) is False

        stored = repository.get_by_isbn(book.isbn)
        assert stored.title == "Original"
        assert len(repository.get_all()) == 1

    def test_create_preserves_release_date(self, repository, book_factory):
        book = book_factory(release_date=date(1999, 12, 31))
        repository.create(book)

        assert repository.get_by_isbn(book.isbn).release_date == date(1999, 12, 31)


class TestRead:
    def test_get_unknown_isbn_returns_none(self, repository):
        assert repository.get_by_isbn("978-0000000000") is None

    def test_get_all_on_empty_table(self, repository):
        assert repository.get_all() == []

    def test_get_all_returns_every_book(self, repository, book_factory):
        books = [book_factory(title=f"Book {i}") for i in range(3)]
        for book in books:
            repository.create(book)

        stored = repository.get_all()
        assert {b.isbn for b in stored} == {b.isbn for b in books}

    def test_search_by_title_matches_substring(self, repository, book_factory):
        book = book_factory(title="Test Book")
        repository.create(book)

        assert [b.isbn for b in repository.search_by_title("est")] == [book.isbn]
        assert repository.search_by_title("Invalid") == []

    def test_search_by_title_ignores_ascii_case(self, repository, book_factory):
        repository.create(book_factory(title="Domain Driven Design"))

        assert len(repository.search_by_title("driven")) == 1

    def test_search_only_looks_at_title(self, repository, book_factory):
        repository.create(book_factory(title="Refactoring", author="Martin Fowler"))

        assert repository.search_by_title("Fowler") == []


class TestUpdate:
    def test_update_overwrites_non_key_fields(self, repository, book_factory):
        book = book_factory()
        repository.create(book)

        changed = book_factory(
            isbn=book.isbn,
            title="Second Edition",
            author="Someone Else",
            short_description="Revised",
            page_count=250,
            release_date=date(2025, 6, 1),
        )
        assert repository.update(changed) is True
        assert repository.get_by_isbn(book.isbn) == changed

    def test_update_missing_book_does_not_insert(self, repository, book_factory):
        book = book_factory()

        assert repository.update(book) is False
        assert repository.get_by_isbn(book.isbn) is None
        assert repository.get_all() == []


class TestDelete:
    def test_delete_twice(self, repository, book_factory):
        book = book_factory()
        repository.create(book)

        assert repository.delete(book.isbn) is True
        assert repository.delete(book.isbn) is False
        assert repository.get_by_isbn(book.isbn) is None

    def test_delete_leaves_other_books(self, repository, book_factory):
        keep, remove = book_factory(), book_factory()
        repository.create(keep)
        repository.create(remove)

        repository.delete(remove.isbn)

        assert [b.isbn for b in repository.get_all()] == [keep.isbn]


class TestStorage:
    def test_rows_use_catalog_columns(self, db_manager, repository, book_factory):
        book = book_factory(release_date=date(2024, 1, 1))
        repository.create(book)

        with db_manager.engine.connect() as conn:
            row = conn.exec_driver_sql(
                "SELECT Isbn, Title, PageCount, ReleaseDate FROM Books"
            ).one()

        assert row == (book.isbn, book.title, 100, "2024-01-01")

    def test_sessions_are_closed_after_each_call(self, db_manager, repository, book_factory):
        created = []
        original = db_manager.create_session

        def tracking_session():
            session = original()
            created.append(session)
            return session

        with patch.object(db_manager, "create_session", side_effect=tracking_session):
            repository.create(book_factory())
            repository.get_all()

        assert len(created) == 2
        for session in created:
            assert not session.in_transaction()

    def test_database_failure_raises_repository_error(self, tmp_path):
        # No init_database(): the Books table does not exist
        repository = BookRepository(DatabaseManager(f"sqlite:///{tmp_path / 'empty.db'}"))

        with pytest.raises(RepositoryError) as exc_info:
            repository.get_all()

        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_integrity_error_on_create_reports_duplicate(
        self, db_manager, repository, book_factory
    ):
        book = book_factory()
        repository.create(book)

        # Simulate losing the check-then-insert race: the existence check sees nothing
        with patch("sqlalchemy.orm.Session.get", return_value=None):
            assert repository.create(book) is False

        with db_manager.session_scope() as session:
            assert len(session.execute(select(BookDB)).scalars().all()) == 1
