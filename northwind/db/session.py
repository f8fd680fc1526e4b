"""Database session management."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, exc as sa_exc
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from ..errors import IntegrityError, StoreError


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores foreign keys unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class SessionManager:
    """Manages database sessions."""

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize session manager with database URL."""
        self.database_url = database_url
        self.engine: Engine = create_engine(database_url, echo=echo)
        if self.engine.dialect.name == 'sqlite':
            event.listen(self.engine, 'connect', _enable_sqlite_foreign_keys)
        # Returned entities stay readable after the session closes
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )
        self.logger = logging.getLogger(__name__)

    def get_session(self) -> Session:
        """Get a new database session."""
        session = self.SessionLocal()
        self.logger.debug(f"Created new session: {id(session)}")
        return session

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run a unit of work in its own session.

        Commits when the block exits cleanly, rolls back on any exception and
        always closes the session. Store integrity violations surface as
        IntegrityError, every other SQLAlchemy failure as StoreError.
        """
        session = self.get_session()
        self.logger.debug(f"Entering transaction with session: {id(session)}")
        try:
            yield session
            self.logger.debug("Committing session")
            session.commit()
        except sa_exc.IntegrityError as e:
            self.logger.debug("Rolling back session")
            session.rollback()
            raise IntegrityError(str(e.orig)) from e
        except sa_exc.SQLAlchemyError as e:
            self.logger.debug("Rolling back session")
            session.rollback()
            self.logger.exception("Store failure")
            raise StoreError(str(e)) from e
        except BaseException:
            self.logger.debug("Rolling back session")
            session.rollback()
            raise
        finally:
            self.logger.debug("Closing session")
            session.close()

    def create_schema(self, drop: bool = False) -> None:
        """Create every table known to the models."""
        from .models import Base

        if drop:
            self.logger.info("Dropping existing tables")
            Base.metadata.drop_all(self.engine)
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
