"""
Authentication message patterns.

Builds the authentication service from configuration and binds it to the
``auth/store`` and ``auth/login`` patterns of a dispatcher.
"""
from typing import Optional

from credential_service.auth.jwt import TokenIssuer
from credential_service.auth.passwords import CredentialHasher
from credential_service.auth.repository import SQLAlchemyUserStore, UserStore
from credential_service.auth.responses import ResponseNormalizer
from credential_service.auth.service import AuthService
from credential_service.transport import MessageDispatcher

STORE_PATTERN = "auth/store"
LOGIN_PATTERN = "auth/login"


def build_auth_service(store: Optional[UserStore] = None) -> AuthService:
    """Construct the service with its collaborators from configuration."""
    return AuthService(
        store=store or SQLAlchemyUserStore(),
        hasher=CredentialHasher(),
        token_issuer=TokenIssuer(),
        normalizer=ResponseNormalizer(),
    )


def register_auth_patterns(dispatcher: MessageDispatcher, service: AuthService) -> MessageDispatcher:
    """Bind ``service`` to the authentication message patterns."""
    @dispatcher.message_pattern(STORE_PATTERN)
    async def store(data):
        return await service.register(data)

    @dispatcher.message_pattern(LOGIN_PATTERN)
    async def login(data):
        return await service.login(data)

    service.log_event("service.patterns", {"patterns": [STORE_PATTERN, LOGIN_PATTERN]})
    return dispatcher
