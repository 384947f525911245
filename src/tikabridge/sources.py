"""Document sources: where the raw bytes handed to the engine come from."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any, Protocol, Union
from urllib.parse import urlparse

import httpx

from tikabridge.errors import SourceNotFoundError, UnsupportedSourceError


logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT_SECONDS = 60.0
_URI_SCHEMES = {"http", "https"}


class Readable(Protocol):
    def read(self) -> bytes | str: ...


@dataclass(frozen=True, slots=True)
class PathSource:
    path: Path

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True, slots=True)
class URISource:
    uri: str
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS

    def read_bytes(self) -> bytes:
        logger.debug("Fetching %s", self.uri)
        response = httpx.get(self.uri, follow_redirects=True, timeout=self.fetch_timeout)
        response.raise_for_status()
        return response.content


@dataclass(frozen=True, slots=True)
class StreamSource:
    stream: Readable

    def read_bytes(self) -> bytes:
        payload = self.stream.read()
        if isinstance(payload, str):
            return payload.encode("utf-8")
        return bytes(payload)


DocumentSource = Union[PathSource, URISource, StreamSource]


def _is_uri(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme.lower() in _URI_SCHEMES and bool(parsed.netloc)


def resolve_source(value: Any) -> DocumentSource:
    """Classify a caller-supplied input as a path, URI or stream.

    An existing local file wins over URI parsing; a string that is neither
    raises ``SourceNotFoundError`` and any non-string, non-readable value
    raises ``UnsupportedSourceError``.
    """

    if isinstance(value, (str, os.PathLike)):
        text = os.fspath(value)
        if isinstance(text, bytes):
            raise UnsupportedSourceError(value)
        if os.path.isfile(text):
            return PathSource(Path(text))
        if isinstance(value, str) and _is_uri(value):
            return URISource(value)
        raise SourceNotFoundError(text)

    if callable(getattr(value, "read", None)):
        return StreamSource(value)

    raise UnsupportedSourceError(value)
