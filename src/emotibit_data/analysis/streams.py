"""Tag-based extraction of measurement streams from parsed packets."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Union

import numpy as np

from ..core.models import BatchResult, DataPacket, ParseResult

PacketSource = Union[BatchResult, Iterable[Union[DataPacket, ParseResult]]]


def iter_packets(items: PacketSource) -> Iterator[DataPacket]:
    """Yield the successfully parsed packets in ``items``, skipping failures."""
    for item in items:
        if isinstance(item, ParseResult):
            if item.packet is not None:
                yield item.packet
        elif isinstance(item, DataPacket):
            yield item


def filter_by_tag(items: PacketSource, tag: str) -> List[DataPacket]:
    """Return the packets whose type tag equals ``tag``, in input order."""
    return [p for p in iter_packets(items) if p.type_tag == tag]


def group_by_tag(items: PacketSource) -> Dict[str, List[DataPacket]]:
    """Split packets into per-tag lists (tags in order of first appearance)."""
    groups: Dict[str, List[DataPacket]] = {}
    for packet in iter_packets(items):
        groups.setdefault(packet.type_tag, []).append(packet)
    return groups


def extract_values(items: PacketSource, tag: str, index: int = 0) -> np.ndarray:
    """
    Take one numeric payload value from every packet tagged ``tag``.

    Parameters
    ----------
    items:
        Packets, parse results or a :class:`BatchResult`.
    tag:
        Type tag to select, e.g. ``"HR"``.
    index:
        Payload position to extract; packets with a shorter payload are skipped.

    Returns
    -------
    np.ndarray
        1-D float64 array, empty when nothing matches.
    """
    values = [
        float(p.payload[index])
        for p in filter_by_tag(items, tag)
        if len(p.payload) > index and not isinstance(p.payload[index], str)
    ]
    return np.asarray(values, dtype=float)


def mean_value(items: PacketSource, tag: str, index: int = 0) -> Optional[float]:
    """Arithmetic mean of :func:`extract_values`, or ``None`` when there is no data."""
    values = extract_values(items, tag, index)
    if values.size == 0:
        return None
    return float(np.mean(values))


def average_heart_rate(items: PacketSource) -> Optional[float]:
    """Mean of the first ``HR`` payload value per packet (bpm)."""
    return mean_value(items, "HR")


__all__ = [
    "average_heart_rate",
    "extract_values",
    "filter_by_tag",
    "group_by_tag",
    "iter_packets",
    "mean_value",
]
