"""Database session management."""
import logging
import threading
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from ..errors import StorageFailure
from .models import Base

class SessionManager:
    """Manages database sessions for the inventory store.

    Used as a context manager, each ``with`` block gets its own session that
    is committed on success, rolled back on error and always closed. Engine
    errors raised inside the block surface as ``StorageFailure``.
    """

    def __init__(self, database_url: str, engine: Optional[Engine] = None, echo: bool = False):
        """Initialize session manager with database URL.

        Args:
            database_url: SQLAlchemy database URL
            engine: Optional pre-built engine (takes precedence over the URL)
            echo: Echo SQL statements through the sqlalchemy.engine logger
        """
        self.database_url = database_url
        self.engine = engine or create_engine(database_url, echo=echo)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )
        self.logger = logging.getLogger(__name__)
        self._local = threading.local()

    def create_schema(self) -> None:
        """Create the products table if it does not exist yet."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageFailure('schema creation', e) from e
        self.logger.debug(f"Schema ready on {self.engine.url}")

    def ping(self) -> bool:
        """Run a trivial statement to check connectivity."""
        with self as session:
            return session.execute(text("SELECT 1")).scalar() == 1

    def get_session(self) -> Session:
        """Get a new database session."""
        session = self.SessionLocal()
        self.logger.debug(f"Created new session: {id(session)}")
        return session

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    @property
    def _sessions(self) -> list:
        # one stack per thread
        if not hasattr(self._local, "sessions"):
            self._local.sessions = []
        return self._local.sessions

    def __enter__(self) -> Session:
        """Context manager entry."""
        session = self.get_session()
        self._sessions.append(session)
        return session

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        session = self._sessions.pop()
        try:
            if exc_type is None:
                self.logger.debug("Committing session")
                try:
                    session.commit()
                except SQLAlchemyError as e:
                    session.rollback()
                    raise StorageFailure('commit', e) from e
            else:
                self.logger.debug("Rolling back session")
                session.rollback()
        finally:
            self.logger.debug(f"Closing session: {id(session)}")
            session.close()

        if exc_type is not None and issubclass(exc_type, SQLAlchemyError):
            raise StorageFailure('database operation', exc_val) from exc_val
        return False
