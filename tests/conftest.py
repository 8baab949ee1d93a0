"""Test configuration and fixtures for the Library API.

1. Isolated test databases - each test gets its own SQLite file
2. Configuration overrides - test-specific settings, never the global ones
3. An HTTP client running the full app lifespan (schema created on startup)
"""

import os
from collections.abc import Callable, Generator
from datetime import date
from pathlib import Path

import pytest
from faker import Faker
from fastapi.testclient import TestClient

from library_api.api import create_app
from library_api.config import ServerConfig, reset_config
from library_api.database import BookRepository, DatabaseManager
from library_api.models import Book

fake = Faker()
Faker.seed(42)


# === Test Database Fixtures ===


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for each test."""
    return tmp_path / "test_library.db"


@pytest.fixture
def test_database_url(test_db_path: Path) -> str:
    """Provide a SQLAlchemy database URL for testing."""
    return f"sqlite:///{test_db_path}"


@pytest.fixture
def db_manager(test_database_url: str) -> Generator[DatabaseManager, None, None]:
    """Connection provider over an initialized, empty Books table."""
    manager = DatabaseManager(test_database_url)
    manager.init_database()
    yield manager
    manager.close()


@pytest.fixture
def repository(db_manager: DatabaseManager) -> BookRepository:
    return BookRepository(db_manager)


# === Configuration Fixtures ===


@pytest.fixture
def test_config(test_database_url: str) -> ServerConfig:
    """Provide a test-specific configuration with an isolated database."""
    return ServerConfig(
        database_url=test_database_url,
        debug=True,
        log_level="DEBUG",
        logfire_enabled=False,
        _env_file=None,
    )


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Run a test without any LIBRARY_API_* variables in the environment."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("LIBRARY_API_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


# === HTTP Fixtures ===


@pytest.fixture
def client(test_config: ServerConfig) -> Generator[TestClient, None, None]:
    """HTTP client for the full app; entering it runs startup (table creation)."""
    app = create_app(test_config)
    with TestClient(app) as test_client:
        yield test_client


# === Test Data Fixtures ===


@pytest.fixture
def book_factory() -> Callable[..., Book]:
    """Build valid books with unique ISBNs; keyword arguments override fields."""

    def _make(**overrides) -> Book:
        data = {
            "isbn": fake.unique.isbn13(),
            "title": "Test Book",
            "author": "Test Author",
            "short_description": "Test Description",
            "page_count": 100,
            "release_date": date(2024, 1, 1),
        }
        data.update(overrides)
        return Book(**data)

    return _make


@pytest.fixture
def book_payload(book_factory) -> Callable[..., dict]:
    """JSON request bodies in the wire format (camelCase keys)."""

    def _make(**overrides) -> dict:
        return book_factory(**overrides).model_dump(mode="json", by_alias=True)

    return _make


# === Cleanup Fixtures ===


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Reset the configuration singleton so tests don't interfere with each other."""
    yield

    reset_config()
