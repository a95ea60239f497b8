"""
Message-pattern transport.

Handlers are registered under a pattern name (``auth/store``) and receive the
message payload. ``dispatch`` always answers with a ``ResponseEnvelope``, so
callers on the HTTP or WebSocket side never see a raw exception.
"""
from typing import Any, Awaitable, Callable, Dict, List
from fastapi import status

from credential_service.base_microservice import BaseMicroservice
from credential_service.auth.responses import ResponseEnvelope, normalize

MessageHandler = Callable[[Any], Awaitable[ResponseEnvelope]]


class MessageDispatcher(BaseMicroservice):
    """Registry of message-pattern handlers."""

    def __init__(self):
        super().__init__("transport")
        self.handlers: Dict[str, MessageHandler] = {}

    def add_pattern(self, pattern: str, handler: MessageHandler) -> None:
        if pattern in self.handlers:
            raise ValueError(f"Message pattern '{pattern}' is already registered.")
        self.handlers[pattern] = handler

    def message_pattern(self, pattern: str):
        """Decorator form of ``add_pattern``."""
        def decorator(handler: MessageHandler) -> MessageHandler:
            self.add_pattern(pattern, handler)
            return handler
        return decorator

    @property
    def patterns(self) -> List[str]:
        return sorted(self.handlers)

    async def dispatch(self, pattern: str, data: Any) -> ResponseEnvelope:
        handler = self.handlers.get(pattern)
        if handler is None:
            self.logger.warning(f"Unknown message pattern: {pattern}")
            return normalize(status.HTTP_404_NOT_FOUND, f"Unknown message pattern: {pattern}")
        try:
            return await handler(data)
        except Exception as e:
            self.log_error(e, context=f"Handler for {pattern}")
            return normalize(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
