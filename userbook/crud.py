from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models
from .domain import User


class UserRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def add(self, user: User) -> None:
        """Insert one row and commit it straight away.

        Storage errors are not handled here; the session is rolled back and
        the original exception propagates.
        """
        self._db.add(models.UserRecord(name=user.name))
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

    def all(self) -> List[User]:
        """Return every stored user, most recently added first."""
        rows = self._db.execute(
            select(models.UserRecord.name).order_by(models.UserRecord.id.desc())
        ).mappings()
        return [User(name=row["name"]) for row in rows]
