import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseUnavailable(Exception):
    """Raised when no connection to the database can be opened."""


class ConnectionFactory:
    """Opens one database session per request.

    Sessions raise on any SQL error, results are read through
    ``Result.mappings()`` and every value travels as a bound parameter.
    """

    def __init__(self, settings: Settings, engine: Optional[Engine] = None) -> None:
        self.engine = engine or create_engine(
            settings.sqlalchemy_url(),
            echo=settings.sql_echo,
        )
        self._session_factory = sessionmaker(bind=self.engine, autoflush=False)

    def make(self) -> Session:
        """Return a session whose connection is already open.

        Raises:
            DatabaseUnavailable: if the database cannot be reached.
        """
        db = self._session_factory()
        try:
            db.connection()
        except DBAPIError as exc:
            db.close()
            logger.error("Could not connect to the database: %s", exc.orig)
            raise DatabaseUnavailable("Database unavailable.") from exc
        return db

    def create_schema(self) -> None:
        """Create the ``users`` table if it does not exist yet."""
        # Register the mapped tables on Base.metadata.
        from . import models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
        except DBAPIError as exc:
            raise DatabaseUnavailable("Database unavailable.") from exc


def get_db(request: Request) -> Iterator[Session]:
    """Yield a database session and make sure it is always closed."""
    db = request.app.state.connection_factory.make()
    try:
        yield db
    finally:
        db.close()
