"""Registry of EmotiBit type tags.

Each tag maps to a :class:`TypeTagInfo` describing how the rest of the line is
laid out: which reserved fields follow the tag and how payload values are
interpreted. The table is built once at import time and exposed read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Literal, Mapping, Tuple

from .errors import UnrecognizedTagError

ValueKind = Literal["int", "uint", "float", "text"]
TagGroup = Literal["data", "computer", "control", "sync"]


@dataclass(frozen=True)
class ReservedField:
    name: str
    kind: ValueKind = "int"


# Protocol version, then a 0-100 reliability score (currently always 100).
STANDARD_RESERVED: Tuple[ReservedField, ...] = (
    ReservedField("protocol_version"),
    ReservedField("data_reliability"),
)


@dataclass(frozen=True)
class TypeTagInfo:
    tag: str
    name: str
    value_kind: ValueKind
    group: TagGroup = "data"
    reserved: Tuple[ReservedField, ...] = STANDARD_RESERVED

    @property
    def reserved_count(self) -> int:
        return len(self.reserved)

    @property
    def numeric(self) -> bool:
        return self.value_kind != "text"


def _build(*infos: TypeTagInfo) -> Mapping[str, TypeTagInfo]:
    table: Dict[str, TypeTagInfo] = {}
    for info in infos:
        if info.tag in table:
            raise ValueError(f"duplicate type tag {info.tag!r}")
        table[info.tag] = info
    return MappingProxyType(table)


TYPE_TAGS: Mapping[str, TypeTagInfo] = _build(
    # Electrodermal activity
    TypeTagInfo("EA", "EDA", "float"),
    TypeTagInfo("EL", "EDL", "float"),
    TypeTagInfo("ER", "EDR", "float"),
    # Photoplethysmography
    TypeTagInfo("PI", "PPG infrared", "uint"),
    TypeTagInfo("PR", "PPG red", "uint"),
    TypeTagInfo("PG", "PPG green", "uint"),
    # Temperature
    TypeTagInfo("T0", "temperature 0", "float"),
    TypeTagInfo("T1", "temperature 1", "float"),
    TypeTagInfo("TH", "thermopile", "float"),
    # IMU
    TypeTagInfo("AX", "accelerometer x", "float"),
    TypeTagInfo("AY", "accelerometer y", "float"),
    TypeTagInfo("AZ", "accelerometer z", "float"),
    TypeTagInfo("GX", "gyroscope x", "float"),
    TypeTagInfo("GY", "gyroscope y", "float"),
    TypeTagInfo("GZ", "gyroscope z", "float"),
    TypeTagInfo("MX", "magnetometer x", "int"),
    TypeTagInfo("MY", "magnetometer y", "int"),
    TypeTagInfo("MZ", "magnetometer z", "int"),
    # Battery
    TypeTagInfo("BV", "battery voltage", "float"),
    TypeTagInfo("B%", "battery percent", "uint"),
    # Derived signals
    TypeTagInfo("HR", "heart rate", "int"),
    TypeTagInfo("BI", "inter-beat interval", "int"),
    TypeTagInfo("SA", "skin conductance response amplitude", "float"),
    TypeTagInfo("SF", "skin conductance response frequency", "float"),
    TypeTagInfo("SR", "skin conductance response rise time", "float"),
    # Text payloads
    TypeTagInfo("EM", "error message", "text"),
    TypeTagInfo("UN", "user note", "text", group="computer"),
    TypeTagInfo("RB", "record begin", "text", group="control"),
    TypeTagInfo("RD", "request data", "text", group="sync"),
    TypeTagInfo("TL", "local time", "text", group="sync"),
    TypeTagInfo("AK", "acknowledge", "text", group="sync"),
    TypeTagInfo("TX", "transmit", "text", group="sync"),
)

# (first sub-tag, second sub-tag) -> refined tag for TX packets
TX_SUBTYPES: Mapping[Tuple[str, str], str] = MappingProxyType(
    {
        ("LC", "LM"): "TX_LC_LM",
        ("TL", "LC"): "TX_TL_LC",
    }
)


def is_known(tag: str) -> bool:
    return tag in TYPE_TAGS


def lookup(tag: str) -> TypeTagInfo:
    """Return the descriptor for ``tag`` (exact, case-sensitive match)."""
    try:
        return TYPE_TAGS[tag]
    except KeyError:
        raise UnrecognizedTagError(tag) from None


__all__ = [
    "ReservedField",
    "STANDARD_RESERVED",
    "TypeTagInfo",
    "TYPE_TAGS",
    "TX_SUBTYPES",
    "is_known",
    "lookup",
]
