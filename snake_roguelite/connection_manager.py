"""WebSocket connection management and state serialization."""

import json
import logging
from typing import Optional

from fastapi import WebSocket

from .game import Game

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Holds the single presentation client; a newer one replaces it."""

    def __init__(self):
        self.connection: Optional[WebSocket] = None

    async def connect(self, ws: WebSocket):
        await ws.accept()
        if self.connection is not None:
            logger.info("Replacing presentation client")
            try:
                await self.connection.close()
            except RuntimeError as e:
                logger.debug("Old presentation client already closed: %s", e)
        self.connection = ws

    def disconnect(self, ws: WebSocket):
        if self.connection is ws:
            self.connection = None

    async def send(self, message: str):
        if self.connection is None:
            return
        try:
            await self.connection.send_text(message)
        except Exception:
            logger.warning("Dropping presentation client after failed send")
            self.connection = None


def build_state_msg(game: Game) -> str:
    msg = {"type": "state"}
    msg.update(game.snapshot())
    game.drain_notifications()
    return json.dumps(msg)
