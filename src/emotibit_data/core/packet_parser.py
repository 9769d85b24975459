"""
Turn single EmotiBit packet lines into :class:`DataPacket` values.

``parse_line()`` never raises for malformed input: it returns either a
``DataPacket`` or one of the :mod:`~emotibit_data.core.errors` classes, so
batch and streaming callers can keep going past a bad line. The module holds
no mutable state and can be called from many threads at once.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple, Union

from .errors import LengthMismatchError, PacketError, PayloadParseError, StructuralError
from .grammar import (
    MIN_TOKENS,
    parse_fixed,
    parse_payload,
    parse_reserved,
    parse_token,
    payload_start,
    split_tokens,
)
from .models import DataPacket, ParseResult, PayloadValue
from .type_tags import TX_SUBTYPES, TypeTagInfo, lookup

logger = logging.getLogger(__name__)

PacketOrError = Union[DataPacket, PacketError]


def _split_tx(
    payload: Tuple[PayloadValue, ...], start: int
) -> Tuple[str, Tuple[PayloadValue, ...]]:
    """
    Refine a ``TX`` payload such as ``LC,<lsl>,LM,<marker>`` into a sub-typed tag.

    Payloads with fewer than four values stay plain ``TX``.
    """
    if len(payload) < 4:
        return "TX", payload
    tag1, val1, tag2, val2 = payload[:4]
    refined = TX_SUBTYPES.get((str(tag1), str(tag2)))
    if refined is None:
        raise PayloadParseError(start, str(tag1), reason="unsupported TX sub-tags")

    if refined == "TX_LC_LM":
        kinds = ("float", "float")
    else:
        # TL carries the host's local time string.
        kinds = ("text", "float")

    converted = []
    for value, kind, position in zip((val1, val2), kinds, (start + 1, start + 3)):
        try:
            converted.append(parse_token(str(value), kind))
        except ValueError:
            raise PayloadParseError(position, str(value)) from None
    return refined, (tag1, converted[0], tag2, converted[1]) + payload[4:]


def _build_packet(tokens: Sequence[str], *, split_tx: bool) -> DataPacket:
    fixed = parse_fixed(tokens)
    info: TypeTagInfo = lookup(fixed.type_tag)
    reserved = parse_reserved(tokens, info)

    actual = len(tokens) - payload_start(info)
    if actual != fixed.data_length:
        raise LengthMismatchError(fixed.data_length, actual)
    payload = parse_payload(tokens, info)

    type_tag = info.tag
    if split_tx and type_tag == "TX":
        type_tag, payload = _split_tx(payload, payload_start(info))

    return DataPacket(
        timestamp=fixed.timestamp,
        packet_number=fixed.packet_number,
        data_length=fixed.data_length,
        type_tag=type_tag,
        reserved=tuple(int(v) for v in reserved),
        payload=payload,
    )


def parse_line(
    line: str,
    *,
    strip_tokens: bool = False,
    split_tx: bool = True,
) -> PacketOrError:
    """
    Parse one raw packet line.

    Parameters
    ----------
    line:
        Text of a single packet; a trailing ``\\r``/``\\n`` is ignored.
    strip_tokens:
        Trim whitespace around every comma-separated token before parsing.
        Off by default, so padded tokens are reported as parse errors.
    split_tx:
        Re-tag ``TX`` packets carrying ``LC/LM`` or ``TL/LC`` pairs as
        ``TX_LC_LM`` / ``TX_TL_LC``.

    Returns
    -------
    DataPacket or PacketError
        The packet, or the classified error with ``raw`` set to ``line``.
    """
    text = line.rstrip("\r\n")
    tokens = split_tokens(text, strip=strip_tokens)
    try:
        return _build_packet(tokens, split_tx=split_tx)
    except PacketError as exc:
        return exc.with_raw(text)


def parse_result(line: str, line_no: int = 0, **options: bool) -> ParseResult:
    """Parse ``line`` and wrap the outcome together with its line number."""
    text = line.rstrip("\r\n")
    outcome = parse_line(text, **options)
    if isinstance(outcome, PacketError):
        return ParseResult(line_no=line_no, raw=text, error=outcome)
    return ParseResult(line_no=line_no, raw=text, packet=outcome)


def parse_datagram(data: bytes, **options: bool) -> PacketOrError:
    """
    Parse one UDP datagram carrying a single packet line.

    The payload is decoded as UTF-8 and trimmed; bytes that do not decode are
    reported as a :class:`StructuralError`.
    """
    try:
        text = data.decode("utf-8").strip()
    except UnicodeDecodeError as exc:
        logger.debug("Undecodable datagram (%d bytes): %s", len(data), exc)
        return StructuralError(0, MIN_TOKENS, raw=repr(data))
    return parse_line(text, **options)


__all__ = ["PacketOrError", "parse_datagram", "parse_line", "parse_result"]
