"""
Shared fixtures: an in-memory user store for service tests, a fresh SQLite
database for store and transport tests.
"""
import os

# Must be set before credential_service.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from credential_service.base_microservice import Base
from credential_service.auth.errors import DuplicateEmailError
from credential_service.auth.jwt import TokenIssuer
from credential_service.auth.models import User
from credential_service.auth.passwords import CredentialHasher
from credential_service.auth.repository import SQLAlchemyUserStore
from credential_service.auth.responses import ResponseNormalizer
from credential_service.auth.router import register_auth_patterns
from credential_service.auth.service import AuthService
from credential_service.main import app, get_dispatcher
from credential_service.transport import MessageDispatcher

TEST_SECRET = "test-secret"


class InMemoryUserStore:
    """User store keeping records in a dict keyed by email."""

    def __init__(self):
        self.users = {}
        self.next_id = 1
        self.find_calls = 0
        self.save_calls = 0

    async def find_by_email(self, email):
        self.find_calls += 1
        return self.users.get(email)

    def create(self, **fields):
        return User(**fields)

    async def save(self, user):
        self.save_calls += 1
        if user.email in self.users:
            raise DuplicateEmailError(user.email)
        user.id = self.next_id
        self.next_id += 1
        self.users[user.email] = user
        return user


class CountingHasher(CredentialHasher):
    def __init__(self, rounds=4):
        super().__init__(rounds=rounds)
        self.hash_calls = 0
        self.verify_calls = 0

    def hash(self, plaintext):
        self.hash_calls += 1
        return super().hash(plaintext)

    def verify(self, plaintext, hashed):
        self.verify_calls += 1
        return super().verify(plaintext, hashed)


class CountingTokenIssuer(TokenIssuer):
    def __init__(self, secret=TEST_SECRET, **kwargs):
        super().__init__(secret=secret, **kwargs)
        self.issue_calls = 0

    def issue(self, claims):
        self.issue_calls += 1
        return super().issue(claims)


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def hasher():
    return CountingHasher()


@pytest.fixture
def token_issuer():
    return CountingTokenIssuer()


@pytest.fixture
def auth_service(store, hasher, token_issuer):
    return AuthService(
        store=store,
        hasher=hasher,
        token_issuer=token_issuer,
        normalizer=ResponseNormalizer(),
    )


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def sql_store(test_session_factory):
    return SQLAlchemyUserStore(test_session_factory)


@pytest.fixture
def sql_auth_service(sql_store, token_issuer):
    return AuthService(
        store=sql_store,
        hasher=CredentialHasher(rounds=4),
        token_issuer=token_issuer,
        normalizer=ResponseNormalizer(),
    )


@pytest.fixture
def test_dispatcher(sql_auth_service):
    return register_auth_patterns(MessageDispatcher(), sql_auth_service)


@pytest.fixture
async def client(test_dispatcher):
    """HTTP client for the app with the dispatcher bound to the test database."""
    app.dependency_overrides[get_dispatcher] = lambda: test_dispatcher
    transport = ASGITransport(app=app)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        yield ac
    app.dependency_overrides.clear()
