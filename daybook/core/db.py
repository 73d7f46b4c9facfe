"""
Database session management.

Provides explicit ORM session handling with SQLAlchemy.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from daybook.core.config import Config
from daybook.core.models import Base

logger = logging.getLogger(__name__)


def get_engine(config: Config) -> Engine:
    """
    Create SQLAlchemy engine.

    Uses SQLite with WAL mode for better concurrency.
    """
    db_path = Path(config.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )

    # Enable WAL mode for better concurrent access
    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()

    return engine


def init_db(config: Config) -> None:
    """
    Initialize database schema.

    Creates all tables if they don't exist.
    """
    engine = get_engine(config)
    Base.metadata.create_all(engine)
    engine.dispose()


class StorageHandle:
    """
    Owns the single database engine for one journal file.

    The engine is opened on first use and reused afterwards.
    Pass one handle to every store that should share it.
    """

    def __init__(self, config: Config):
        self.config = config
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    def acquire(self) -> Engine:
        """
        Open the database on first call, return the live engine afterwards.

        Creating the schema is idempotent.
        """
        if self._engine is not None:
            return self._engine

        engine = get_engine(self.config)
        Base.metadata.create_all(engine)

        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

        logger.debug(f"Opened journal database at {self.config.database_path}")
        return engine

    def get_session(self) -> Session:
        """
        Create a new database session.

        Remember to close or use as context manager.
        """
        self.acquire()
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide transactional scope around a series of operations.

        Usage:
            with handle.session_scope() as session:
                session.add(entry)
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Release the engine. The next acquire() reopens it."""
        if self._engine is not None:
            self._engine.dispose()
            logger.debug(f"Closed journal database at {self.config.database_path}")
        self._engine = None
        self._session_factory = None
