"""Classified parse failures for EmotiBit packet lines.

Every failure the packet parser can report is one of the subclasses below.
They derive from :class:`ValueError` so callers may raise them, but the parser
itself only *returns* them; see :func:`emotibit_data.core.packet_parser.parse_line`.
"""

from __future__ import annotations

from typing import Optional


class PacketError(ValueError):
    """Base class for a line that could not be turned into a packet."""

    kind = "packet"

    def __init__(self, message: str, raw: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.raw = raw

    def with_raw(self, raw: str) -> "PacketError":
        """Attach the offending line and return ``self``."""
        self.raw = raw
        return self

    def __str__(self) -> str:
        if self.raw is None:
            return self.message
        return f"{self.message}, line: {self.raw!r}"


class StructuralError(PacketError):
    """Too few comma-separated tokens to hold the fixed fields."""

    kind = "structural"

    def __init__(self, token_count: int, minimum: int, raw: Optional[str] = None) -> None:
        super().__init__(
            f"expected at least {minimum} comma-separated fields, got {token_count}",
            raw,
        )
        self.token_count = token_count
        self.minimum = minimum


class FieldParseError(PacketError):
    """A fixed-position field could not be parsed as its declared type."""

    kind = "field"

    def __init__(self, field: str, position: int, token: str, raw: Optional[str] = None) -> None:
        super().__init__(f"bad {field} at position {position}: {token!r}", raw)
        self.field = field
        self.position = position
        self.token = token


class UnrecognizedTagError(PacketError):
    kind = "unrecognized_tag"

    def __init__(self, tag: str, raw: Optional[str] = None) -> None:
        super().__init__(f"unknown type tag: {tag!r}", raw)
        self.tag = tag


class LengthMismatchError(PacketError):
    """Declared data length differs from the number of payload tokens."""

    kind = "length_mismatch"

    def __init__(self, declared: int, actual: int, raw: Optional[str] = None) -> None:
        super().__init__(
            f"data length {declared} does not match {actual} payload values", raw
        )
        self.declared = declared
        self.actual = actual


class PayloadParseError(PacketError):
    """A payload token is not a valid value for the packet's type tag.

    ``position`` is the token index within the whole line.
    """

    kind = "payload"

    def __init__(
        self,
        position: int,
        token: str,
        raw: Optional[str] = None,
        *,
        reason: str = "bad payload value",
    ) -> None:
        super().__init__(f"{reason} at position {position}: {token!r}", raw)
        self.position = position
        self.token = token
        self.reason = reason


class TimeSyncError(ValueError):
    """Raised when a time-sync map cannot be built from the packets given."""


__all__ = [
    "PacketError",
    "StructuralError",
    "FieldParseError",
    "UnrecognizedTagError",
    "LengthMismatchError",
    "PayloadParseError",
    "TimeSyncError",
]
