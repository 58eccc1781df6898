from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Awaitable, Callable, Deque, List, Optional, Union

from .game import Event, GameEngine
from .layout import hit_test

LOGGER = logging.getLogger("video_poker.loop")


@dataclass(frozen=True)
class Click:
    x: float
    y: float


@dataclass(frozen=True)
class PrimaryAction:
    pass


@dataclass(frozen=True)
class CardClick:
    position: int


@dataclass(frozen=True)
class BetMenu:
    open: bool = True


@dataclass(frozen=True)
class BetChoice:
    amount: int


@dataclass(frozen=True)
class DismissNotice:
    pass


InputEvent = Union[Click, PrimaryAction, CardClick, BetMenu, BetChoice, DismissNotice]


class GameLoop:
    """Frame-driven wrapper: inputs queue up and are applied once per tick."""

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine
        self.inputs: Deque[InputEvent] = deque()
        self.frames = 0

    def submit(self, event: InputEvent) -> None:
        self.inputs.append(event)

    def tick(self, delta_ms: float) -> List[Event]:
        events: List[Event] = []
        while self.inputs:
            events.extend(self._dispatch(self.inputs.popleft()))
        events.extend(self.engine.advance(delta_ms))
        self.frames += 1
        return events

    async def run(
        self,
        ready: Awaitable[object],
        on_frame: Callable[[List[Event]], Awaitable[None]],
        *,
        fps: int = 60,
        stop: Optional[asyncio.Event] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        # Nothing is drawn until the client has its sprites.
        await ready
        interval = 1 / fps
        last = clock()
        LOGGER.debug("Frame loop started at %s fps", fps)
        while stop is None or not stop.is_set():
            await asyncio.sleep(interval)
            now = clock()
            events = self.tick((now - last) * 1000)
            last = now
            await on_frame(events)

    def _dispatch(self, event: InputEvent) -> List[Event]:
        engine = self.engine
        if isinstance(event, Click):
            return self._dispatch_click(event)
        if isinstance(event, PrimaryAction):
            return engine.press_action()
        if isinstance(event, CardClick):
            return engine.toggle_hold(event.position)
        if isinstance(event, BetMenu):
            return engine.open_bet_menu() if event.open else engine.close_bet_menu()
        if isinstance(event, BetChoice):
            return engine.select_bet(event.amount)
        if isinstance(event, DismissNotice):
            return engine.dismiss_notice()
        raise ValueError(f"Unsupported input: {event!r}")

    def _dispatch_click(self, click: Click) -> List[Event]:
        engine = self.engine
        ctx = engine.context
        # The insufficient-funds notice blocks the table until acknowledged.
        if ctx.notice is not None:
            return engine.dismiss_notice()

        options = engine.config.bet_options
        hit = hit_test(
            engine.layout,
            click.x,
            click.y,
            engine.state,
            menu_open=ctx.bet_menu_open,
            bet_options=options,
        )
        if hit is None:
            return []
        if hit.target == "bet_option":
            assert hit.index is not None
            return engine.select_bet(options[hit.index])
        if hit.target == "bet_button":
            return engine.open_bet_menu()
        if hit.target == "action_button":
            return engine.press_action()
        if hit.target == "card":
            assert hit.index is not None
            return engine.toggle_hold(hit.index)
        return []
