from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import mimetypes
from datetime import datetime, timezone
from http import HTTPStatus
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import unquote, urlsplit

import websockets
from websockets.asyncio.server import ServerConnection, serve
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from core.game import GameEngine
from core.layout import HAND_SIZE
from core.loop import BetChoice, BetMenu, CardClick, Click, DismissNotice, GameLoop, PrimaryAction
from core.models import GameConfig

LOGGER = logging.getLogger("poker_host")

# HostServer serves the page and its sprites over plain HTTP and upgrades /ws
# to a play session. Every network concern lives here; GameEngine stays pure.

WS_PATH = "/ws"
INDEX_DOCUMENT = "index.html"


def _envelope(msg_type: str, payload: Dict[str, object]) -> str:
    body = {"type": msg_type, "v": 1, "ts": datetime.now(timezone.utc).isoformat()}
    body.update(payload)
    return json.dumps(body)


def _decode(raw: Union[str, bytes]) -> Dict[str, Any]:
    try:
        message = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return message if isinstance(message, dict) else {}


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _plain_response(status: HTTPStatus, text: str) -> Response:
    body = text.encode("utf-8")
    headers = Headers(
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("Content-Length", str(len(body))),
        ]
    )
    return Response(status.value, status.phrase, headers, body)


class PlaySession:
    """One connected player: a private engine driven by its own frame loop."""

    def __init__(self, websocket: Any, config: GameConfig, fps: int = 60) -> None:
        self.websocket = websocket
        self.engine = GameEngine(config)
        self.loop = GameLoop(self.engine)
        self.fps = fps
        self.ready = asyncio.Event()
        self.stop = asyncio.Event()
        self.dirty = True

    async def run(self) -> None:
        await self.send_json("welcome", {"config": self._config_payload()})
        frames = asyncio.create_task(
            self.loop.run(self.ready.wait(), self.on_frame, fps=self.fps, stop=self.stop)
        )
        try:
            async for raw in self.websocket:
                await self.handle_message(raw)
        except websockets.ConnectionClosed:
            pass
        finally:
            self.stop.set()
            frames.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await frames

    async def handle_message(self, raw: Union[str, bytes]) -> None:
        message = _decode(raw)
        if not message:
            return
        msg_type = message.get("type")

        if msg_type == "ready":
            self.ready.set()
        elif msg_type == "click":
            x, y = message.get("x"), message.get("y")
            if not (_is_number(x) and _is_number(y)):
                await self.send_error("BAD_SCHEMA", "click needs numeric x and y")
                return
            self.loop.submit(Click(float(x), float(y)))
        elif msg_type == "action":
            self.loop.submit(PrimaryAction())
        elif msg_type == "hold":
            position = message.get("position")
            if not _is_int(position) or not 0 <= position < HAND_SIZE:
                await self.send_error("BAD_SCHEMA", f"position must be 0-{HAND_SIZE - 1}")
                return
            self.loop.submit(CardClick(position))
        elif msg_type == "bet_menu":
            is_open = message.get("open", True)
            if not isinstance(is_open, bool):
                await self.send_error("BAD_SCHEMA", "open must be true or false")
                return
            self.loop.submit(BetMenu(open=is_open))
        elif msg_type == "bet":
            amount = message.get("amount")
            if not _is_int(amount) or amount not in self.engine.config.bet_options:
                await self.send_error("BAD_SCHEMA", f"amount must be one of {list(self.engine.config.bet_options)}")
                return
            self.loop.submit(BetChoice(amount))
        elif msg_type == "dismiss":
            self.loop.submit(DismissNotice())
        else:
            await self.send_error("UNKNOWN_TYPE", "Unsupported message type")

    async def on_frame(self, events: List[Dict[str, object]]) -> None:
        for event in events:
            await self.send_json("event", event)
        if events or self.dirty or self.engine.is_animating:
            self.dirty = False
            await self.send_json("snapshot", self.engine.snapshot_payload())

    async def send_json(self, msg_type: str, payload: Dict[str, object]) -> None:
        try:
            await self.websocket.send(_envelope(msg_type, payload))
        except websockets.ConnectionClosed:
            self.stop.set()

    async def send_error(self, code: str, msg: str) -> None:
        await self.send_json("error", {"code": code, "msg": msg})

    def _config_payload(self) -> Dict[str, object]:
        config = self.engine.config
        layout = self.engine.layout
        return {
            "starting_balance": config.starting_balance,
            "bet_options": list(config.bet_options),
            "fps": self.fps,
            "canvas": [layout.width, layout.height],
            "card": [layout.card_width, layout.card_height],
            "deck": list(layout.deck_position),
            "bet_button": layout.bet_button.payload(),
            "action_button": layout.action_button.payload(),
            "bet_option_buttons": [rect.payload() for rect in layout.bet_option_rects(len(config.bet_options))],
        }


class HostServer:
    def __init__(self, config: Optional[GameConfig] = None, root: Union[str, Path] = ".", fps: int = 60) -> None:
        self.config = config or GameConfig()
        self.root = Path(root).resolve()
        self.fps = fps
        self.sessions: set[PlaySession] = set()

    async def start(self, host: str = "0.0.0.0", port: int = 3000) -> None:
        async with serve(self.handle_connection, host, port, process_request=self.process_request):
            LOGGER.info("Video poker running at http://localhost:%s (root=%s)", port, self.root)
            await asyncio.Future()

    async def process_request(self, connection: Optional[ServerConnection], request: Request) -> Optional[Response]:
        path = unquote(urlsplit(request.path).path)
        if request.headers.get("Upgrade", "").lower() == "websocket":
            if path == WS_PATH:
                return None  # let the WebSocket handshake continue
            return _plain_response(HTTPStatus.NOT_FOUND, "not found\n")

        target = self.resolve_static(path)
        if target is None:
            LOGGER.debug("404 %s", path)
            return _plain_response(HTTPStatus.NOT_FOUND, "not found\n")

        try:
            # Keep disk reads off the loop that drives the session frames.
            body = await asyncio.to_thread(target.read_bytes)
        except OSError as exc:
            LOGGER.warning("Could not read %s: %s", target, exc)
            return _plain_response(HTTPStatus.NOT_FOUND, "not found\n")
        content_type, _ = mimetypes.guess_type(target.name)
        headers = Headers(
            [
                ("Content-Type", content_type or "application/octet-stream"),
                ("Content-Length", str(len(body))),
            ]
        )
        return Response(HTTPStatus.OK.value, HTTPStatus.OK.phrase, headers, body)

    def resolve_static(self, path: str) -> Optional[Path]:
        if path in ("", "/"):
            path = "/" + INDEX_DOCUMENT
        try:
            candidate = (self.root / path.lstrip("/")).resolve()
            if candidate != self.root and self.root not in candidate.parents:
                return None
            if not candidate.is_file():
                return None
        except (OSError, ValueError):
            # NUL bytes and over-long names cannot name a file under the root.
            return None
        return candidate

    async def handle_connection(self, websocket: ServerConnection) -> None:
        session = PlaySession(websocket, self.config, fps=self.fps)
        self.sessions.add(session)
        LOGGER.info("Player connected (%s active)", len(self.sessions))
        try:
            await session.run()
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Play session crashed: %s", exc)
        finally:
            self.sessions.discard(session)
            LOGGER.info(
                "Player disconnected after %s rounds (balance=%s)",
                session.engine.context.round_id,
                session.engine.context.balance,
            )
