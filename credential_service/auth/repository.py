"""
User store.

``UserStore`` is the interface the authentication service depends on.
``SQLAlchemyUserStore`` implements it on the async session factory; each call
runs in its own short-lived session.
"""
from typing import Any, Optional, Protocol
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.future import select

from credential_service.auth.errors import DuplicateEmailError
from credential_service.auth.models import User
from credential_service.base_microservice import AsyncSessionLocal


class UserStore(Protocol):
    async def find_by_email(self, email: str) -> Optional[User]:
        ...

    def create(self, **fields: Any) -> User:
        ...

    async def save(self, user: User) -> User:
        ...


class SQLAlchemyUserStore:
    """User persistence backed by the ``users`` table."""

    def __init__(self, session_factory: async_sessionmaker = AsyncSessionLocal):
        self.session_factory = session_factory

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self.session_factory() as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    def create(self, **fields: Any) -> User:
        """Build an unsaved user record."""
        return User(**fields)

    async def save(self, user: User) -> User:
        """
        Persist ``user`` and return it with its generated id.

        Raises:
            DuplicateEmailError: If the email is already stored
        """
        async with self.session_factory() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateEmailError(user.email) from e
            await session.refresh(user)
            return user
