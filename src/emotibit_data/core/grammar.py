"""Positional field layout and strict token parsers.

A packet line is split on commas into tokens laid out as::

    0 timestamp, 1 packet number, 2 data length, 3 type tag,
    4.. reserved fields (count set by the tag), then the payload.

Numbers are parsed as plain base-10 literals. Python's ``int()``/``float()``
also accept surrounding whitespace, ``_`` digit separators and ``inf``/``nan``;
none of those are valid on the wire, so tokens are matched against explicit
patterns first. Whitespace is only tolerated when the caller asks for tokens
to be stripped.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from .errors import FieldParseError, PayloadParseError, StructuralError
from .models import PayloadValue
from .type_tags import STANDARD_RESERVED, TypeTagInfo, ValueKind

_INT_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
_UINT_PATTERN = re.compile(r"\+?\d+", re.ASCII)
_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?", re.ASCII)

TIMESTAMP = 0
PACKET_NUMBER = 1
DATA_LENGTH = 2
TYPE_TAG = 3

FIXED_FIELDS: Tuple[str, ...] = ("timestamp", "packet_number", "data_length", "type_tag")
RESERVED_START = len(FIXED_FIELDS)
# Every registered tag carries the standard reserved pair, so a line needs at
# least this many tokens before a payload can start.
MIN_TOKENS = RESERVED_START + len(STANDARD_RESERVED)


def _to_int(token: str) -> int:
    if not _INT_PATTERN.fullmatch(token):
        raise ValueError(token)
    return int(token)


def _to_uint(token: str) -> int:
    if not _UINT_PATTERN.fullmatch(token):
        raise ValueError(token)
    return int(token)


def _to_float(token: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(token):
        raise ValueError(token)
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(token)
    return value


def _to_text(token: str) -> str:
    return token


TOKEN_PARSERS: Dict[ValueKind, Callable[[str], PayloadValue]] = {
    "int": _to_int,
    "uint": _to_uint,
    "float": _to_float,
    "text": _to_text,
}


def parse_token(token: str, kind: ValueKind) -> PayloadValue:
    """Parse one token as ``kind``; raises ``ValueError`` when it does not match."""
    return TOKEN_PARSERS[kind](token)


def split_tokens(line: str, *, strip: bool = False) -> List[str]:
    """Split a line on commas; with ``strip`` every token is trimmed."""
    tokens = line.split(",")
    if strip:
        tokens = [t.strip() for t in tokens]
    return tokens


@dataclass(frozen=True)
class FixedFields:
    timestamp: int
    packet_number: int
    data_length: int
    type_tag: str


def _field(tokens: Sequence[str], position: int, kind: ValueKind) -> PayloadValue:
    token = tokens[position]
    try:
        return parse_token(token, kind)
    except ValueError:
        raise FieldParseError(FIXED_FIELDS[position], position, token) from None


def parse_fixed(tokens: Sequence[str]) -> FixedFields:
    """
    Parse the four fixed fields.

    Raises
    ------
    StructuralError
        If there are fewer than :data:`MIN_TOKENS` tokens.
    FieldParseError
        For the first fixed field that does not parse.
    """
    if len(tokens) < MIN_TOKENS:
        raise StructuralError(len(tokens), MIN_TOKENS)
    timestamp = _field(tokens, TIMESTAMP, "int")
    packet_number = _field(tokens, PACKET_NUMBER, "uint")
    data_length = _field(tokens, DATA_LENGTH, "uint")
    return FixedFields(
        timestamp=timestamp,
        packet_number=packet_number,
        data_length=data_length,
        type_tag=tokens[TYPE_TAG],
    )


def parse_reserved(tokens: Sequence[str], info: TypeTagInfo) -> Tuple[PayloadValue, ...]:
    """Parse the reserved fields that ``info`` declares after the tag."""
    end = RESERVED_START + info.reserved_count
    if len(tokens) < end:
        raise StructuralError(len(tokens), end)
    values = []
    for offset, reserved_field in enumerate(info.reserved):
        position = RESERVED_START + offset
        token = tokens[position]
        try:
            values.append(parse_token(token, reserved_field.kind))
        except ValueError:
            raise FieldParseError(reserved_field.name, position, token) from None
    return tuple(values)


def payload_start(info: TypeTagInfo) -> int:
    return RESERVED_START + info.reserved_count


def parse_payload(tokens: Sequence[str], info: TypeTagInfo) -> Tuple[PayloadValue, ...]:
    """Parse every token after the reserved fields as ``info.value_kind``."""
    start = payload_start(info)
    values = []
    for position in range(start, len(tokens)):
        token = tokens[position]
        try:
            values.append(parse_token(token, info.value_kind))
        except ValueError:
            raise PayloadParseError(position, token) from None
    return tuple(values)


__all__ = [
    "FIXED_FIELDS",
    "MIN_TOKENS",
    "RESERVED_START",
    "FixedFields",
    "parse_fixed",
    "parse_payload",
    "parse_reserved",
    "parse_token",
    "payload_start",
    "split_tokens",
]
