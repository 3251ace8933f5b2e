"""
Database connection and pool management.
Provides the SQLAlchemy engine, the injected database handle, and the base class for models.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base

from .config import Settings

# Set up logging
logger = logging.getLogger(__name__)

# Create base class for declarative models
Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    """
    Create a pooled SQLAlchemy engine for the configured database.

    Args:
        settings: Application settings

    Returns:
        Engine: Engine owning the connection pool
    """
    url = settings.sqlalchemy_url
    if str(url).startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(
            url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    enable_sqlite_foreign_keys(engine)
    return engine


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores foreign keys unless asked per connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Database:
    """
    Handle over the connection pool, passed to every data access function.

    Each call to connect() checks a connection out of the pool inside a
    transaction. The transaction is committed when the block exits normally,
    rolled back when it raises, and the connection always goes back to the pool.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a handle with a fresh engine for the given settings."""
        return cls(build_engine(settings))

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """
        Check out a pooled connection wrapped in a transaction.

        Yields:
            Connection: Connection bound to an open transaction
        """
        with self.engine.begin() as conn:
            yield conn

    def create_tables(self) -> None:
        """Create any missing tables for the registered models."""
        # Models must be imported so their tables are registered on Base
        from .users import models as _users  # noqa: F401
        from .doctors import models as _doctors  # noqa: F401
        from .patients import models as _patients  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def test_database_connection(self) -> bool:
        """
        Issue a trivial query to confirm the database is reachable.

        Returns:
            bool: True if the query succeeded, False otherwise
        """
        try:
            with self.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connection successful")
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection failed: {str(e)}")
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()


def get_db(request: Request) -> Database:
    """
    Database dependency - Returns the handle created at application startup.

    Args:
        request: Incoming request, used to reach the application state

    Returns:
        Database: The application's database handle
    """
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database handle is not configured on the application")
    return database
