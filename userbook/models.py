from sqlalchemy import Column, Integer, Text

from .database import Base


class UserRecord(Base):
    """Storage row for a submitted name.

    The id only orders rows; it is never handed to the domain layer.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
