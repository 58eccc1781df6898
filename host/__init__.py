"""Video poker host package: serves the page and wraps the engine with websockets."""

from .server import HostServer, PlaySession

__all__ = ["HostServer", "PlaySession"]
