#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import websockets

logging.basicConfig(level=logging.INFO)
LOGGER = logging.getLogger("manual_client")

# ManualClient plays through the same /ws session the browser uses, with
# terminal prompts instead of canvas clicks.

PROMPT_STATES = {"INITIAL", "SELECT", "RESULT"}


def format_hand(slots: List[Dict[str, Any]]) -> str:
    cells = []
    for slot in slots:
        card = slot.get("card")
        if slot.get("kind") == "placeholder" or not card:
            cells.append("[  ]")
            continue
        label = card["label"]
        cells.append(f"[{label}]*" if slot.get("held") else f"[{label}]")
    return " ".join(f"{idx}:{cell}" for idx, cell in enumerate(cells))


def format_paytable(rows: List[Dict[str, Any]]) -> str:
    lines = []
    for row in rows:
        marker = ">>" if row.get("highlight") else "  "
        lines.append(f"{marker} {row['hand']:<16} ${row['amount']}")
    return "\n".join(lines)


def parse_command(line: str, state: str, bet_options: List[int], notice: bool = False) -> Optional[Dict[str, Any]]:
    """Translate a typed command; only commands the server will act on pass."""
    parts = line.strip().lower().split()
    cmd, args = (parts[0], parts[1:]) if parts else ("", [])
    if notice:
        if cmd in ("", "ok", "dismiss"):
            return {"type": "dismiss"}
        print("Acknowledge the notice first ('ok')")
        return None
    if cmd in ("", "play", "roll", "next", "p", "r", "n"):
        return {"type": "action"}
    if cmd in ("hold", "h"):
        if state != "SELECT":
            print("Cards can only be held after the deal")
            return None
        if len(args) != 1 or not args[0].isdigit() or int(args[0]) > 4:
            print("Usage: hold <0-4>")
            return None
        return {"type": "hold", "position": int(args[0])}
    if cmd in ("bet", "b"):
        if state != "INITIAL":
            print("Bets can only change between rounds")
            return None
        if len(args) != 1 or not args[0].isdigit() or int(args[0]) not in bet_options:
            print(f"Usage: bet <{'|'.join(str(option) for option in bet_options)}>")
            return None
        return {"type": "bet", "amount": int(args[0])}
    print("Commands: play/roll/next (or Enter), hold N, bet N, ok, quit")
    return None


class ManualClient:
    def __init__(self, url: str) -> None:
        self.url = url
        self.bet_options: List[int] = []

    async def run(self) -> None:
        async with websockets.connect(self.url) as ws:
            await ws.send(json.dumps({"type": "ready", "v": 1}))
            async for raw in ws:
                msg = json.loads(raw)
                msg_type = msg.get("type")
                if msg_type == "welcome":
                    self.bet_options = list(msg["config"]["bet_options"])
                    print(f"Connected. Starting balance ${msg['config']['starting_balance']}")
                elif msg_type == "error":
                    print(f"Server error {msg.get('code')}: {msg.get('msg')}")
                elif msg_type == "snapshot":
                    command = await self._handle_snapshot(msg)
                    if command == "quit":
                        break
                    if command is not None:
                        await ws.send(json.dumps({"v": 1, **command}))

    async def _handle_snapshot(self, snap: Dict[str, Any]) -> Optional[Any]:
        # Every accepted command yields at least one event, hence one more
        # snapshot; prompting once per settled snapshot keeps us in step.
        state = snap["state"]
        if state not in PROMPT_STATES:
            return None

        self._render(snap)
        while True:
            line = await asyncio.to_thread(input, f"{snap['button']}> ")
            if line.strip().lower() in ("q", "quit", "exit"):
                return "quit"
            command = parse_command(line, state, self.bet_options, notice=bool(snap.get("notice")))
            if command is not None:
                return command

    def _render(self, snap: Dict[str, Any]) -> None:
        print()
        print(format_paytable(snap["paytable"]))
        print(f"Deck: {snap['deck_count']}  Balance: ${snap['balance']}  Bet: ${snap['bet']}")
        print(format_hand(snap["hand"]))
        for line in snap["messages"]:
            print(line)
        if snap.get("notice"):
            print(f"!! {snap['notice']} (type 'ok')")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play video poker from the terminal")
    parser.add_argument("--url", default="ws://localhost:3000/ws")
    args = parser.parse_args()
    try:
        asyncio.run(ManualClient(args.url).run())
    except KeyboardInterrupt:
        LOGGER.info("Bye")


if __name__ == "__main__":
    main()
