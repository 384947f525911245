"""Content-type lookup against the MIME-type registry."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import mimetypes


# Types the engine reports that older platform mime.types files lack.
_SUPPLEMENTAL_TYPES: tuple[tuple[str, str], ...] = (
    ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", ".docx"),
    ("application/vnd.openxmlformats-officedocument.wordprocessingml.template", ".dotx"),
    ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", ".xlsx"),
    ("application/vnd.openxmlformats-officedocument.spreadsheetml.template", ".xltx"),
    ("application/vnd.openxmlformats-officedocument.presentationml.presentation", ".pptx"),
    ("application/vnd.openxmlformats-officedocument.presentationml.slideshow", ".ppsx"),
    ("application/vnd.oasis.opendocument.text", ".odt"),
    ("application/vnd.oasis.opendocument.spreadsheet", ".ods"),
    ("application/vnd.oasis.opendocument.presentation", ".odp"),
    ("application/vnd.apple.pages", ".pages"),
    ("application/vnd.apple.numbers", ".numbers"),
    ("application/vnd.apple.keynote", ".key"),
    ("application/msword", ".doc"),
    ("application/msword", ".dot"),
    ("application/vnd.ms-excel", ".xls"),
    ("application/vnd.ms-powerpoint", ".ppt"),
    ("application/rtf", ".rtf"),
    ("application/epub+zip", ".epub"),
    ("application/pdf", ".pdf"),
    ("text/plain", ".txt"),
    ("text/html", ".html"),
    ("text/html", ".htm"),
)


@dataclass(frozen=True, slots=True)
class MimeType:
    """A registered content type and the file extensions mapped to it."""

    content_type: str
    extensions: tuple[str, ...]

    @property
    def preferred_extension(self) -> str | None:
        return self.extensions[0] if self.extensions else None


def normalize_content_type(value: str) -> str:
    """Drop parameters (``; charset=...``) and case from a content-type string."""

    return value.split(";", 1)[0].strip().lower()


@lru_cache(maxsize=1)
def _registry() -> mimetypes.MimeTypes:
    registry = mimetypes.MimeTypes()
    for content_type, extension in _SUPPLEMENTAL_TYPES:
        registry.add_type(content_type, extension)
    return registry


def lookup(content_type: str) -> MimeType | None:
    """Resolve *content_type* to a registry entry, or None when it is unknown."""

    normalized = normalize_content_type(content_type)
    if not normalized or "/" not in normalized:
        return None

    extensions = _registry().guess_all_extensions(normalized, strict=False)
    if not extensions:
        return None
    return MimeType(content_type=normalized, extensions=tuple(ext.lstrip(".") for ext in extensions))
