"""FastAPI application: state route, intent WebSocket and the tick loop."""

import asyncio
import json
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from .connection_manager import ConnectionManager, build_state_msg
from .constants import DEFAULT_SAVE_PATH, HOST, PORT
from .game import Game
from .intents import intent_from_msg
from .models import Mode
from .storage import JsonFileStore

logger = logging.getLogger(__name__)

IDLE_DELAY = 0.1


@asynccontextmanager
async def lifespan(app: FastAPI):
    task = asyncio.create_task(game_loop())
    yield
    task.cancel()


app = FastAPI(lifespan=lifespan)
game = Game(JsonFileStore(os.environ.get("SNAKE_SAVE_PATH", DEFAULT_SAVE_PATH)))
manager = ConnectionManager()


@app.get("/state")
async def get_state():
    return game.snapshot()


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    await ws.send_text(build_state_msg(game))
    try:
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
            except ValueError:
                continue
            if not isinstance(msg, dict) or msg.get("type") != "intent":
                continue
            intent = intent_from_msg(msg)
            if intent is None:
                continue
            if not game.handle(intent):
                logger.debug("Ignored %s in mode %s", type(intent).__name__, game.mode.value)
            await ws.send_text(build_state_msg(game))
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(ws)


def play_tick() -> float:
    """Credit the tick interval as play time, then tick, so a game-over save includes it."""
    delay = 1 / game.session.current_speed
    game.add_play_time(delay)
    game.tick()
    return delay


async def game_loop():
    while True:
        if game.mode is not Mode.PLAYING:
            await asyncio.sleep(IDLE_DELAY)
            continue

        delay = play_tick()
        await manager.send(build_state_msg(game))

        await asyncio.sleep(delay)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    port = int(os.environ.get("SNAKE_PORT", PORT))
    print(f"Snake server starting on http://{HOST}:{port}")
    uvicorn.run(app, host=HOST, port=port)
