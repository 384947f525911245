"""Exception taxonomy for the engine bridge.

Errors raised by the bridge itself derive from :class:`TikaBridgeError` and
also from the closest builtin, so callers can catch either.  Spawn failures
(``OSError``), socket failures (``ConnectionError``), malformed JSON
(``json.JSONDecodeError``) and HTTP failures (``httpx.HTTPError``) are not
wrapped and reach the caller unchanged.
"""

from __future__ import annotations

import errno


class TikaBridgeError(Exception):
    """Base class for errors raised by the bridge."""


class SourceNotFoundError(TikaBridgeError, FileNotFoundError):
    """Raised when a document input names neither an existing file nor a URI."""

    def __init__(self, value: str) -> None:
        super().__init__(errno.ENOENT, "missing file or invalid URI", value)


class UnsupportedSourceError(TikaBridgeError, TypeError):
    """Raised when a document input is not a path, URI or readable object."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"can't read from {type(value).__name__}")


class ExtractionTimeout(TikaBridgeError, TimeoutError):
    """Raised when a caller-supplied deadline elapses during delegation."""

    def __init__(self, description: str, seconds: float) -> None:
        self.description = description
        self.seconds = seconds
        super().__init__(f"{description} timed out after {seconds:g}s")


class EngineStartupError(TikaBridgeError, RuntimeError):
    """Raised when a server-mode engine never starts accepting connections."""

    def __init__(self, port: int, message: str) -> None:
        self.port = port
        self.message = message
        super().__init__(f"{message} (port={port})")


class MetadataDecodeError(TikaBridgeError, ValueError):
    """Raised when the engine's metadata payload is valid JSON but not an object."""
