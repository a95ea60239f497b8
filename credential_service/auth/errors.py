"""
Failure taxonomy for the authentication pipeline.

Each error carries the status code and caller-visible message it maps to.
They are raised inside the service and converted to envelopes at its
boundary; none of them is meant to reach the transport.
"""
from typing import Any
from fastapi import status


class AuthError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: Any = None):
        self.message = self.default_message if message is None else message
        super().__init__(self.message)


class ValidationFailure(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class InvalidCredentials(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid password"


class NotFound(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Email not found"


class DuplicateAccount(AuthError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already exists"


class TokenGenerationFailed(AuthError):
    default_message = "Token generation failed"


class DuplicateEmailError(Exception):
    """Raised by a user store when saving would violate email uniqueness."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already stored: {email}")
