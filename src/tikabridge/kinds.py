"""Output kinds understood by the engine and their command-line switches."""

from __future__ import annotations

from enum import Enum


class OutputKind(Enum):
    TEXT = "text"
    HTML = "html"
    METADATA = "metadata"
    MIMETYPE = "mimetype"  # metadata output, resolved against the MIME registry

    @classmethod
    def coerce(cls, value: OutputKind | str) -> OutputKind:
        """Accept either a member or its string value."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown output kind {value!r}; expected one of: {choices}") from None

    @property
    def switches(self) -> tuple[str, ...]:
        return _SWITCHES[self]


_SWITCHES: dict[OutputKind, tuple[str, ...]] = {
    OutputKind.TEXT: ("-t",),
    OutputKind.HTML: ("-h",),
    OutputKind.METADATA: ("-m", "-j"),
    OutputKind.MIMETYPE: ("-m", "-j"),
}
