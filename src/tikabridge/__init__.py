"""Extract text, HTML, metadata and MIME types by delegating to Apache Tika."""

from tikabridge.bridge import EngineServer
from tikabridge.config import BridgeSettings
from tikabridge.document import Document
from tikabridge.errors import (
    EngineStartupError,
    ExtractionTimeout,
    MetadataDecodeError,
    SourceNotFoundError,
    TikaBridgeError,
    UnsupportedSourceError,
)
from tikabridge.extraction import Extractor, read
from tikabridge.kinds import OutputKind
from tikabridge.mime import MimeType

__all__ = [
    "BridgeSettings",
    "Document",
    "EngineServer",
    "EngineStartupError",
    "ExtractionTimeout",
    "Extractor",
    "MetadataDecodeError",
    "MimeType",
    "OutputKind",
    "SourceNotFoundError",
    "TikaBridgeError",
    "UnsupportedSourceError",
    "read",
]
