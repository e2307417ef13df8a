"""WebSocket endpoint for real-time notifications."""

import json
import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from gigflow.api.dependencies import read_credential
from gigflow.containers import AppContainer
from gigflow.domain.notifications import NotificationEvent

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

CLOSE_UNAUTHENTICATED = 4401
CLOSE_FORBIDDEN = 4403


@dataclass(eq=False)
class WebSocketEndpoint:
    """Live endpoint backed by an accepted WebSocket."""

    websocket: WebSocket

    async def send_event(self, event: NotificationEvent) -> None:
        """Push an event as a JSON message."""
        if self.websocket.application_state != WebSocketState.CONNECTED:
            raise ConnectionError("WebSocket is no longer connected")
        await self.websocket.send_json(event.to_message())

    async def close(self) -> None:
        """Close the socket if it is still open."""
        if self.websocket.application_state == WebSocketState.CONNECTED:
            await self.websocket.close()


@router.websocket("/ws")
async def notifications_socket(websocket: WebSocket) -> None:
    """Register the caller's socket after a join message and keep it open."""
    container: AppContainer = websocket.app.state.container
    token = read_credential(websocket, container.settings.session_cookie_name)
    user = container.session_manager.current_user(token)
    if user is None:
        await websocket.close(code=CLOSE_UNAUTHENTICATED)
        return

    await websocket.accept()
    endpoint = WebSocketEndpoint(websocket)
    channel = container.notification_channel
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            data = _parse_message(message.get("text"))
            if not isinstance(data, dict) or data.get("type") != "join":
                continue
            if _parse_user_id(data.get("userId")) != user.id:
                await websocket.send_json(
                    {"type": "error", "message": "Cannot join as another user"}
                )
                await websocket.close(code=CLOSE_FORBIDDEN)
                return
            channel.register(user.id, endpoint)
            await websocket.send_json({"type": "joined", "userId": str(user.id)})
    except WebSocketDisconnect:
        logger.info("Live connection closed", extra={"user_id": str(user.id)})
    finally:
        channel.unregister(endpoint)


def _parse_message(text: str | None) -> object:
    if text is None:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def _parse_user_id(raw: object) -> UUID | None:
    try:
        return UUID(str(raw))
    except ValueError:
        return None
