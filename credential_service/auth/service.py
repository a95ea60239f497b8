"""
Authentication service.

Implements the two operations behind the ``auth/store`` and ``auth/login``
message patterns. Each call runs validation, store access, hashing and token
issuance in sequence and always ends in exactly one ``ResponseEnvelope``.
"""
import asyncio
from typing import Any, Callable
from fastapi import status
from pydantic import BaseModel

from credential_service.base_microservice import BaseMicroservice
from credential_service.auth.errors import (
    AuthError, DuplicateAccount, DuplicateEmailError, InvalidCredentials,
    NotFound, TokenGenerationFailed, ValidationFailure,
)
from credential_service.auth.jwt import TokenClaims, TokenIssuer
from credential_service.auth.passwords import CredentialHasher
from credential_service.auth.repository import UserStore
from credential_service.auth.responses import ResponseEnvelope, ResponseNormalizer
from credential_service.auth.validation import (
    LoginRequest, RegistrationRequest, ValidationOutcome, validate,
)


class LoginResult(BaseModel):
    """Payload returned on a successful login."""
    token: str
    email: str
    name: str


class AuthService(BaseMicroservice):
    """
    Registration and login over an injected user store.

    Args:
        store: User persistence
        hasher: Password hashing
        token_issuer: Signs login tokens
        normalizer: Turns status codes and messages into envelopes
        validator: ``validate(schema_name, payload)`` callable
    """
    def __init__(
        self,
        store: UserStore,
        hasher: CredentialHasher,
        token_issuer: TokenIssuer,
        normalizer: ResponseNormalizer,
        validator: Callable[[str, Any], ValidationOutcome] = validate,
    ):
        super().__init__("auth")
        self.store = store
        self.hasher = hasher
        self.token_issuer = token_issuer
        self.normalizer = normalizer
        self.validator = validator

    def _check(self, schema_name: str, payload: Any) -> None:
        outcome = self.validator(schema_name, payload)
        if not outcome.is_valid:
            raise ValidationFailure(outcome.message)

    async def register(self, payload: Any) -> ResponseEnvelope:
        """
        Register a new account.

        Returns:
            201 on success, 400 on invalid input, 409 if the email is taken,
            500 on any other failure
        """
        try:
            self._check("CreateUser", payload)
            request = RegistrationRequest.model_validate(payload)

            # Checked before hashing so a doomed registration costs no bcrypt work
            if await self.store.find_by_email(request.email) is not None:
                raise DuplicateAccount()

            hashed = await asyncio.to_thread(self.hasher.hash, request.password)
            user = self.store.create(
                email=request.email,
                password=hashed,
                full_name=request.full_name,
            )
            try:
                user = await self.store.save(user)
            except DuplicateEmailError as e:
                raise DuplicateAccount() from e

            self.log_event("user.registered", {"id": user.id, "email": user.email})
            return self.normalizer.normalize(status.HTTP_201_CREATED, "Success")
        except AuthError as e:
            self.log_event("user.register.failed", {"status": e.status_code, "reason": e.message})
            return self.normalizer.normalize(e.status_code, e.message)
        except Exception as e:
            self.log_error(e, context="User registration")
            return self.normalizer.normalize(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

    async def login(self, payload: Any) -> ResponseEnvelope:
        """
        Authenticate an account and issue a token.

        Returns:
            200 with token, email and name; 400 on invalid input, 404 for an
            unknown email, 401 for a wrong password, 500 if signing or
            anything else fails
        """
        try:
            self._check("LoginUser", payload)
            request = LoginRequest.model_validate(payload)

            user = await self.store.find_by_email(request.email)
            if user is None:
                raise NotFound()

            if not await asyncio.to_thread(self.hasher.verify, request.password, user.password):
                raise InvalidCredentials()

            token = self.token_issuer.issue(TokenClaims(sub=str(user.id), email=user.email))

            self.log_event("user.login", {"id": user.id})
            result = LoginResult(token=token, email=user.email, name=user.full_name)
            return self.normalizer.normalize(status.HTTP_200_OK, result.model_dump())
        except TokenGenerationFailed as e:
            self.log_error(e, context="Token generation")
            return self.normalizer.normalize(e.status_code, e.default_message)
        except AuthError as e:
            self.log_event("user.login.failed", {"status": e.status_code, "reason": e.message})
            return self.normalizer.normalize(e.status_code, e.message)
        except Exception as e:
            self.log_error(e, context="User login")
            return self.normalizer.normalize(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected error")
