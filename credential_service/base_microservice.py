import logging
from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from credential_service.config import DATABASE_URL, LOG_LEVEL

# Setup logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(message)s",
)
logger = logging.getLogger("microservice")

# SQLAlchemy async setup
engine = create_async_engine(DATABASE_URL, echo=False, future=True)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
Base = declarative_base()


async def init_models():
    """Create any missing tables. Called once from the app lifespan."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


class BaseMicroservice:
    """
    Base class for all microservices. Provides:
    - A shared logger
    - Event logging
    - Error logging that keeps the cause out of caller-visible responses
    """
    def __init__(self, service_name: Optional[str] = None):
        self.service_name = service_name or "microservice"
        self.logger = logger if service_name is None else logging.getLogger(service_name)

    def log_event(self, event: str, details: Dict[str, Any] = None):
        self.logger.info(f"EVENT: {event} | Details: {details}")

    def log_error(self, error: Exception, context: str = ""):
        self.logger.error(f"ERROR: {error.__class__.__name__}: {error} | Context: {context}")
