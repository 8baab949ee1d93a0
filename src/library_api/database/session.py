"""
Database session management for the Library API.

``DatabaseManager`` is the connection provider: it owns the engine built from
the configured connection string and hands out short-lived sessions through
``session_scope()``. It also creates the ``Books`` table on startup.

Sessions are opened per store operation and always closed, whether the
operation succeeds or raises.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import ServerConfig, get_config
from .schema import Base

logger = logging.getLogger(__name__)


def _is_in_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in database_url


class DatabaseManager:
    """
    Manages the engine and sessions for the book catalog.

    This class provides:
    - Lazy engine creation from a connection string
    - Session factory with transactional scoping
    - Idempotent schema initialization
    """

    def __init__(self, database_url: str | None = None, config: ServerConfig | None = None):
        """
        Initialize the database manager.

        Args:
            database_url: SQLAlchemy database URL. If None, taken from configuration.
            config: Configuration to read the URL from. Defaults to the global one.
        """
        if database_url is None:
            config = config or get_config()
            database_url = config.database_url

            db_path = config.sqlite_path
            if db_path is not None:
                db_path.parent.mkdir(exist_ok=True, parents=True)
                logger.info("Using SQLite database at: %s", db_path.absolute())

        self.database_url = database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        """
        Get or create the database engine.

        In-memory SQLite databases share one connection (StaticPool), otherwise
        each session would see its own empty database.
        """
        if self._engine is None:
            if self.database_url.startswith("sqlite"):
                kwargs = {"connect_args": {"check_same_thread": False}, "echo": False}
                if _is_in_memory_sqlite(self.database_url):
                    kwargs["poolclass"] = StaticPool
                self._engine = create_engine(self.database_url, **kwargs)
            else:
                self._engine = create_engine(
                    self.database_url,
                    pool_size=10,
                    max_overflow=20,
                    pool_pre_ping=True,  # Verify connections before use
                    echo=False,
                )

            logger.info("Database engine created: %s", self._engine.url)

        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,  # Keep objects usable after commit
            )
        return self._session_factory

    def create_session(self) -> Session:
        """
        Create a new database session.

        Note:
            Callers own the session and must close it. Prefer session_scope().
        """
        return self.session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope for database operations.

        ```python
        with db_manager.session_scope() as session:
            book = session.get(Book, isbn)
        # Session is committed or rolled back, then closed
        ```

        Raises:
            Any database errors are logged and re-raised
        """
        session = self.create_session()
        try:
            yield session
            session.commit()
            logger.debug("Database transaction committed successfully")
        except Exception:
            logger.exception("Database error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()

    def init_database(self, drop_existing: bool = False) -> None:
        """
        Create the Books table if it does not exist yet.

        Args:
            drop_existing: If True, drop all tables before creating

        Note:
            Schema changes are not versioned; create_all only adds missing tables.
        """
        engine = self.engine

        if drop_existing:
            logger.warning("Dropping all existing tables...")
            Base.metadata.drop_all(bind=engine)

        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database initialization complete")

    def verify_connection(self) -> bool:
        """
        Verify the database connection is working.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("Database connection failed")
            return False

    def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine:
            self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None
