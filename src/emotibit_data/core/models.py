"""Shared dataclasses for parsed EmotiBit packets and parse outcomes.

Raw packet architecture (one line per packet)::

    TIMESTAMP,PACKET#,DATA_LENGTH,TYPETAG,VERSION,RELIABILITY,PAYLOAD...

- timestamp: device-relative tick count (milliseconds since start)
- packet number: packet count since the device started
- data length: number of values in the payload
- type tag: kind of data carried (see :mod:`emotibit_data.core.type_tags`)
- version / reliability: reserved fields, layout set by the type tag
- payload: the samples themselves
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from .errors import PacketError

PayloadValue = Union[int, float, str]


def _format_value(value: PayloadValue) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


@dataclass(frozen=True, slots=True)
class DataPacket:
    timestamp: int
    packet_number: int
    data_length: int
    type_tag: str
    reserved: Tuple[int, ...]
    payload: Tuple[PayloadValue, ...]

    @property
    def protocol_version(self) -> Optional[int]:
        return self.reserved[0] if len(self.reserved) > 0 else None

    @property
    def data_reliability(self) -> Optional[int]:
        return self.reserved[1] if len(self.reserved) > 1 else None

    @property
    def wire_tag(self) -> str:
        """Tag as transmitted (``TX_LC_LM`` and ``TX_TL_LC`` travel as ``TX``)."""
        if self.type_tag.startswith("TX_"):
            return "TX"
        return self.type_tag

    def to_tokens(self) -> List[str]:
        """Return the canonical comma-separated tokens for this packet."""
        tokens = [
            str(self.timestamp),
            str(self.packet_number),
            str(self.data_length),
            self.wire_tag,
        ]
        tokens.extend(str(value) for value in self.reserved)
        tokens.extend(_format_value(value) for value in self.payload)
        return tokens

    def to_line(self) -> str:
        """Render the packet back into the device's line format."""
        return ",".join(self.to_tokens())


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one input line; exactly one of packet/error is set."""

    line_no: int
    raw: str
    packet: Optional[DataPacket] = None
    error: Optional[PacketError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> DataPacket:
        """Return the packet, or raise the stored error."""
        if self.error is not None:
            raise self.error
        if self.packet is None:
            raise ValueError(f"line {self.line_no} holds neither a packet nor an error")
        return self.packet


@dataclass
class BatchResult:
    """
    Ordered parse results for a whole line source.

    ``results[i]`` always corresponds to the i-th parsed input line; the
    ``packets`` and ``errors`` views partition those results.
    """

    results: List[ParseResult] = field(default_factory=list)

    @property
    def packets(self) -> List[DataPacket]:
        return [r.packet for r in self.results if r.packet is not None]

    @property
    def errors(self) -> List[PacketError]:
        return [r.error for r in self.results if r.error is not None]

    @property
    def failures(self) -> List[ParseResult]:
        """Failed results, keeping line numbers and raw text."""
        return [r for r in self.results if not r.ok]

    def raise_first(self) -> None:
        """Raise the first stored error, if any (for callers that treat failures as fatal)."""
        for error in self.errors:
            raise error

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[ParseResult]:
        return iter(self.results)
