"""
JWT token handling for authentication.

This module provides functionality for:
- Creating signed, time-bounded JWT tokens
- Decoding and verifying JWT tokens
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import jwt
from jwt.exceptions import PyJWTError
from pydantic import BaseModel

from credential_service.auth.errors import TokenGenerationFailed
from credential_service.config import JWT_SECRET, JWT_ALGORITHM, TOKEN_EXPIRY_SECONDS


class TokenClaims(BaseModel):
    """Identity claims embedded in an issued token."""
    sub: str
    email: str


class TokenIssuer:
    """
    Issues HS256 (by default) tokens carrying ``sub``, ``email``, ``iat`` and ``exp``.

    Args:
        secret: Signing secret; empty or None means no key is configured
        expires_delta: Token lifetime, one day unless configured otherwise
        algorithm: JWT signing algorithm
    """
    def __init__(
        self,
        secret: Optional[str] = JWT_SECRET,
        expires_delta: timedelta = timedelta(seconds=TOKEN_EXPIRY_SECONDS),
        algorithm: str = JWT_ALGORITHM,
    ):
        self.secret = secret
        self.expires_delta = expires_delta
        self.algorithm = algorithm

    def issue(self, claims: TokenClaims) -> str:
        """
        Create a signed token for ``claims``.

        Raises:
            TokenGenerationFailed: If no signing key is configured or signing fails
        """
        if not self.secret:
            raise TokenGenerationFailed("Signing secret is not configured")

        issued_at = datetime.now(timezone.utc)
        to_encode: Dict[str, Any] = claims.model_dump()
        to_encode.update({"iat": issued_at, "exp": issued_at + self.expires_delta})
        try:
            return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)
        except (PyJWTError, TypeError, ValueError, NotImplementedError) as e:
            raise TokenGenerationFailed(str(e)) from e

    def decode(self, token: str) -> Optional[TokenClaims]:
        """
        Verify a token and return its claims.

        Returns:
            TokenClaims if the signature and expiry are valid, None otherwise
        """
        if not self.secret:
            return None
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
            return TokenClaims(sub=payload["sub"], email=payload["email"])
        except PyJWTError:
            return None
        except (KeyError, TypeError, ValueError):
            # Signed by us but missing the expected claims
            return None
