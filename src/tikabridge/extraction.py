"""Extraction facade: pick a delegation strategy and shape the engine's answer."""

from __future__ import annotations

import json
import logging
from typing import Union

from charset_normalizer import from_bytes

from tikabridge.bridge.process import read_via_process
from tikabridge.bridge.server import EngineServer
from tikabridge.bridge.socket_call import read_via_socket
from tikabridge.config import BridgeSettings
from tikabridge.errors import MetadataDecodeError
from tikabridge.kinds import OutputKind
from tikabridge.mime import MimeType, lookup


logger = logging.getLogger(__name__)

MetadataValue = Union[str, list[str]]
Metadata = dict[str, MetadataValue]
ExtractionResult = Union[str, Metadata, MimeType, None]


def decode_output(raw: bytes) -> str:
    """Decode engine output, trusting UTF-8 first and detection second."""

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    best = from_bytes(raw).best()
    if best is not None and best.encoding:
        return raw.decode(best.encoding, errors="replace")
    return raw.decode("utf-8", errors="replace")


def parse_metadata(raw: bytes) -> Metadata:
    """Decode the engine's JSON metadata object.

    Malformed JSON raises ``json.JSONDecodeError`` unchanged.
    """

    payload = json.loads(decode_output(raw))
    if not isinstance(payload, dict):
        raise MetadataDecodeError(f"Engine metadata payload is {type(payload).__name__}, expected an object")
    return payload


def first_value(value: MetadataValue | None) -> str | None:
    """Return the first entry of a multi-valued field, or the value itself."""

    if isinstance(value, list):
        return value[0] if value else None
    return value


def resolve_mimetype(metadata: Metadata) -> MimeType | None:
    content_type = first_value(metadata.get("Content-Type"))
    if not content_type:
        return None
    return lookup(content_type)


class Extractor:
    """Route extraction calls to a server or a fresh process and post-process results.

    The strategy is explicit: when constructed with a running
    :class:`EngineServer` that emits the right output format, calls go over
    its socket; otherwise each call spawns the engine.
    """

    def __init__(self, server: EngineServer | None = None, *, settings: BridgeSettings | None = None) -> None:
        self._server = server
        self._settings = settings

    @property
    def server(self) -> EngineServer | None:
        return self._server

    @property
    def settings(self) -> BridgeSettings:
        if self._settings is None:
            self._settings = BridgeSettings.from_env()
        return self._settings

    def read(self, kind: OutputKind | str, data: bytes, *, timeout: float | None = None) -> ExtractionResult:
        output_kind = OutputKind.coerce(kind)
        raw = self.read_raw(output_kind, data, timeout=timeout)

        if output_kind in (OutputKind.TEXT, OutputKind.HTML):
            return decode_output(raw)
        metadata = parse_metadata(raw)
        if output_kind is OutputKind.METADATA:
            return metadata
        return resolve_mimetype(metadata)

    def read_raw(self, kind: OutputKind | str, data: bytes, *, timeout: float | None = None) -> bytes:
        """Return the engine's unprocessed response for *kind*."""

        output_kind = OutputKind.coerce(kind)
        effective_timeout = timeout if timeout is not None else self.settings.timeout
        server = self._server

        if server is not None and server.serves(output_kind):
            logger.debug("Reading %s via server on port %d", output_kind.value, server.port)
            return read_via_socket(data, port=server.port, host=server.host, timeout=effective_timeout)

        if server is not None and server.is_running:
            logger.debug(
                "Server on port %d emits %s output; spawning a process for %s",
                server.port,
                server.kind.value,
                output_kind.value,
            )
        return read_via_process(output_kind, data, timeout=effective_timeout, settings=self.settings)


def read(kind: OutputKind | str, data: bytes, *, timeout: float | None = None) -> ExtractionResult:
    """Extract *kind* from *data* with a one-shot engine process."""

    return Extractor().read(kind, data, timeout=timeout)
