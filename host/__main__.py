import argparse
import asyncio
import logging

from core.models import GameConfig
from .server import HostServer


def main() -> None:
    parser = argparse.ArgumentParser(description="Video poker host: static files plus game sessions")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3000)
    parser.add_argument("--root", default=".", help="Directory holding index.html and sprites/")
    parser.add_argument("--fps", type=int, default=60, help="Frame rate of each session's game loop")
    parser.add_argument("--starting-balance", type=int, default=200)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = GameConfig(starting_balance=args.starting_balance)
    server = HostServer(config, root=args.root, fps=args.fps)
    asyncio.run(server.start(host=args.host, port=args.port))


if __name__ == "__main__":
    main()
