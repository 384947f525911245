"""Document object with lazily extracted, memoized outputs."""

from __future__ import annotations

from datetime import datetime
from functools import cached_property
from typing import Any

from tikabridge.extraction import Extractor, Metadata, first_value, resolve_mimetype
from tikabridge.kinds import OutputKind
from tikabridge.mime import MimeType
from tikabridge.sources import DocumentSource, PathSource, StreamSource, URISource, resolve_source


def parse_timestamp(value: str) -> datetime:
    """Parse the engine's ISO 8601 timestamps, including a trailing ``Z``."""

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    return datetime.fromisoformat(text)


class Document:
    """One input document: a file path, an http(s) URI or a readable stream.

    Each output is computed on first access and cached for the lifetime of the
    object, so repeated reads never go back to the engine::

        doc = Document("sample.docx")
        doc.text
        doc.metadata["Content-Type"]
        doc.mimetype.extensions
    """

    def __init__(self, source: Any, *, extractor: Extractor | None = None, timeout: float | None = None) -> None:
        self._source: DocumentSource = resolve_source(source)
        self._extractor = extractor or Extractor()
        self._timeout = timeout

    @property
    def source(self) -> DocumentSource:
        return self._source

    @property
    def is_path(self) -> bool:
        return isinstance(self._source, PathSource)

    @property
    def is_uri(self) -> bool:
        return isinstance(self._source, URISource)

    @property
    def is_stream(self) -> bool:
        return isinstance(self._source, StreamSource)

    @cached_property
    def data(self) -> bytes:
        """Raw, unparsed document bytes."""

        return self._source.read_bytes()

    @cached_property
    def text(self) -> str:
        return self._extractor.read(OutputKind.TEXT, self.data, timeout=self._timeout)  # type: ignore[return-value]

    @cached_property
    def html(self) -> str:
        return self._extractor.read(OutputKind.HTML, self.data, timeout=self._timeout)  # type: ignore[return-value]

    @cached_property
    def metadata(self) -> Metadata:
        return self._extractor.read(OutputKind.METADATA, self.data, timeout=self._timeout)  # type: ignore[return-value]

    @cached_property
    def mimetype(self) -> MimeType | None:
        # derived from cached metadata rather than a second engine call
        return resolve_mimetype(self.metadata)

    @cached_property
    def creation_date(self) -> datetime | None:
        raw = first_value(self.metadata.get("Creation-Date"))
        if not raw:
            return None
        return parse_timestamp(raw)

    def __repr__(self) -> str:
        return f"Document({self._source!r})"
