"""Core packet model, grammar, type-tag registry, parser and batch reader.

Data flows leaf-first through these modules: :mod:`grammar` splits and types
the positional fields, :mod:`type_tags` says how each tag lays out its
reserved fields and payload, :mod:`packet_parser` turns one line into a
:class:`DataPacket` or a :class:`PacketError`, and :mod:`batch_reader` drives
that over files and live streams.
"""

from .errors import (
    FieldParseError,
    LengthMismatchError,
    PacketError,
    PayloadParseError,
    StructuralError,
    TimeSyncError,
    UnrecognizedTagError,
)
from .models import BatchResult, DataPacket, ParseResult
from .type_tags import TYPE_TAGS, TypeTagInfo, lookup
from .packet_parser import parse_datagram, parse_line, parse_result
from .batch_reader import ReaderHandle, iter_results, read_file, read_lines, start_reader

__all__ = [
    "BatchResult",
    "DataPacket",
    "FieldParseError",
    "LengthMismatchError",
    "PacketError",
    "ParseResult",
    "PayloadParseError",
    "ReaderHandle",
    "StructuralError",
    "TYPE_TAGS",
    "TimeSyncError",
    "TypeTagInfo",
    "UnrecognizedTagError",
    "iter_results",
    "lookup",
    "parse_datagram",
    "parse_line",
    "parse_result",
    "read_file",
    "read_lines",
    "start_reader",
]
