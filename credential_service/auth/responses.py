"""
Response envelopes.

Every public operation answers with a ``ResponseEnvelope``. ``normalize`` is
the single place where an internal decision becomes a wire-level status.
"""
from typing import Any, FrozenSet
from fastapi import status
from pydantic import BaseModel

RECOGNIZED_STATUSES: FrozenSet[int] = frozenset({
    status.HTTP_200_OK,
    status.HTTP_201_CREATED,
    status.HTTP_400_BAD_REQUEST,
    status.HTTP_401_UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN,
    status.HTTP_404_NOT_FOUND,
    status.HTTP_409_CONFLICT,
    status.HTTP_500_INTERNAL_SERVER_ERROR,
})

FALLBACK_STATUS = status.HTTP_500_INTERNAL_SERVER_ERROR


class ResponseEnvelope(BaseModel):
    """Standard response for all message patterns."""
    status: int
    message: Any


def normalize(code: int, message: Any) -> ResponseEnvelope:
    """
    Wrap ``message`` in an envelope carrying ``code``.

    Codes outside ``RECOGNIZED_STATUSES`` collapse to 500; the message is kept.
    """
    if code not in RECOGNIZED_STATUSES:
        code = FALLBACK_STATUS
    return ResponseEnvelope(status=code, message=message)


class ResponseNormalizer:
    """Injectable handle around ``normalize``."""

    def normalize(self, code: int, message: Any) -> ResponseEnvelope:
        return normalize(code, message)
