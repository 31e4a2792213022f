"""Live delivery of new messages to connected WebSocket clients."""

import logging

from fastapi import WebSocket, WebSocketDisconnect

from src.core.schemas import Message

logger = logging.getLogger(__name__)


class LiveHub:
    """Tracks one WebSocket per user id and pushes messages addressed to them.

    Delivery is best effort: a failed send drops the connection and never
    fails the request that created the message.
    """

    def __init__(self) -> None:
        self._clients: dict[int, WebSocket] = {}

    def register(self, user_id: int, websocket: WebSocket) -> None:
        self._clients[user_id] = websocket
        logger.info("User %d connected for live updates", user_id)

    def unregister(self, websocket: WebSocket) -> int | None:
        """Forget ``websocket``. Returns the user id it belonged to, if any."""
        for user_id, client in list(self._clients.items()):
            if client is websocket:
                del self._clients[user_id]
                logger.info("User %d disconnected", user_id)
                return user_id
        return None

    def is_connected(self, user_id: int) -> bool:
        return user_id in self._clients

    async def notify(self, message: Message) -> bool:
        """Send ``message`` to its recipient if connected. Returns True if sent."""
        websocket = self._clients.get(message.to_id)
        if websocket is None:
            return False
        try:
            await websocket.send_json(message.model_dump(mode="json", by_alias=True))
        except (WebSocketDisconnect, RuntimeError, OSError):
            logger.warning(
                "Live delivery of message %d to user %d failed",
                message.id,
                message.to_id,
                exc_info=True,
            )
            self.unregister(websocket)
            return False
        return True
