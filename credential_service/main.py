from fastapi import FastAPI, Depends, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from fastapi import status
from pydantic import BaseModel
from typing import Any, Optional
from contextlib import asynccontextmanager
import json

from credential_service.base_microservice import BaseMicroservice, engine, init_models
from credential_service.auth.responses import normalize
from credential_service.auth.router import build_auth_service, register_auth_patterns
from credential_service.transport import MessageDispatcher

# Create shared base microservice instance
base_service = BaseMicroservice()

# Message-pattern registry with the auth patterns bound to the configured service
dispatcher = register_auth_patterns(MessageDispatcher(), build_auth_service())


def get_dispatcher() -> MessageDispatcher:
    return dispatcher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Creates tables on startup and releases the connection pool on shutdown.
    """
    base_service.log_event("service.startup", {"service": "main"})
    await init_models()
    yield
    base_service.log_event("service.shutdown", {"service": "main"})
    await engine.dispose()


app = FastAPI(
    title="Credential Service",
    description="Account registration and login over message patterns",
    lifespan=lifespan,
)


class MessageRequest(BaseModel):
    """A message for the transport: the pattern to invoke and its payload."""
    pattern: str
    data: Any = None


@app.get("/health", tags=["health"])
async def health_check(dispatcher: MessageDispatcher = Depends(get_dispatcher)):
    """Overall system health check."""
    return {
        "status": "ok",
        "patterns": dispatcher.patterns,
    }


@app.post("/messages", tags=["messages"])
async def handle_message(message: MessageRequest, dispatcher: MessageDispatcher = Depends(get_dispatcher)):
    """
    Deliver one message. The HTTP status mirrors the envelope status.
    """
    envelope = await dispatcher.dispatch(message.pattern, message.data)
    return JSONResponse(status_code=envelope.status, content=envelope.model_dump())


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, dispatcher: MessageDispatcher = Depends(get_dispatcher)):
    """
    WebSocket endpoint for message patterns.
    Client sends {"pattern": str, "data": ..., "id": optional}; each frame gets one reply.
    """
    await websocket.accept()
    try:
        while True:
            msg = await websocket.receive_text()
            try:
                data = json.loads(msg)
            except json.JSONDecodeError:
                await websocket.send_text(json.dumps({
                    "id": None,
                    "pattern": None,
                    "response": normalize(status.HTTP_400_BAD_REQUEST, "Invalid JSON").model_dump(),
                }))
                continue

            message_id: Optional[Any] = data.get("id") if isinstance(data, dict) else None
            pattern = data.get("pattern") if isinstance(data, dict) else None
            if not isinstance(pattern, str) or not pattern:
                envelope = normalize(status.HTTP_400_BAD_REQUEST, "Missing pattern")
            else:
                envelope = await dispatcher.dispatch(pattern, data.get("data"))
            await websocket.send_text(json.dumps({
                "id": message_id,
                "pattern": pattern,
                "response": envelope.model_dump(),
            }))
    except WebSocketDisconnect:
        base_service.log_event("websocket.disconnect", {"client": str(websocket.client)})


# For running directly with uvicorn
if __name__ == "__main__":
    import uvicorn
    from credential_service.config import HOST, PORT
    uvicorn.run("credential_service.main:app", host=HOST, port=PORT, reload=True)
