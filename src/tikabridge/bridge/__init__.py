"""Delegation strategies for reaching the extraction engine."""

from tikabridge.bridge.command import engine_command
from tikabridge.bridge.process import read_via_process
from tikabridge.bridge.server import EngineServer
from tikabridge.bridge.socket_call import CHUNK_SIZE, read_via_socket
from tikabridge.bridge.timeouts import run_with_timeout

__all__ = [
    "CHUNK_SIZE",
    "EngineServer",
    "engine_command",
    "read_via_process",
    "read_via_socket",
    "run_with_timeout",
]
