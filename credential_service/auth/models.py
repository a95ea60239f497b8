"""
Authentication models for the credential service.

This module defines the SQLAlchemy model for registered users.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from credential_service.base_microservice import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A registered account. ``password`` holds the bcrypt hash, never plaintext."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    full_name = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
