"""Database manager and session utilities for Taskboard."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.c1_database_session.base import Base
from taskboard.c1_errors.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record):
    # SQLite's built-in lower() only folds ASCII
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


class DatabaseManager:
    """Owns the engine and session factory for one process.

    Constructed once at startup and passed to the components that need it;
    ``close()`` releases the connection pool at shutdown.
    """

    def __init__(self, database_url: str = "sqlite:///data/taskboard.db", echo: bool = False):
        """Initialize database connection."""
        self.database_url = database_url
        url = make_url(database_url)

        engine_kwargs = {"echo": echo}
        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # A single shared connection keeps the in-memory database alive
                engine_kwargs["poolclass"] = StaticPool
            else:
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(database_url, **engine_kwargs)
        if url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _register_sqlite_functions)
        self.SessionLocal = sessionmaker(
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    def create_tables(self):
        """Create all database tables."""
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database tables ready at {self.engine.url.render_as_string(hide_password=True)}")

    def drop_tables(self):
        """Drop all database tables (for testing)."""
        Base.metadata.drop_all(bind=self.engine)

    def get_session(self) -> Session:
        """Get a database session."""
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations.

        Storage failures are surfaced as StoreUnavailable; any other exception
        rolls back and propagates unchanged.
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database operation failed: {e}")
            raise StoreUnavailable() from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Dispose of the connection pool."""
        self.engine.dispose()
        logger.info("Database connections closed")
