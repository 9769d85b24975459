"""
Map device timestamps onto host wall-clock time.

The host periodically sends a request (``RD``); the device answers with the
host's local time (``TL``) and an acknowledgement (``AK``). Each consecutive
RD, TL, AK triple is one :class:`TimeSync`. Two syncs with short round trips,
taken from well-separated parts of the recording, define a linear mapping
from device ticks (ms) to epoch seconds.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from .. import __version__
from ..core.errors import TimeSyncError
from ..core.models import DataPacket
from .streams import PacketSource, iter_packets

logger = logging.getLogger(__name__)

SYNC_TAGS = ("RD", "TL", "AK")
TL_TIME_FORMAT = "%Y-%m-%d_%H-%M-%S"

# Preferred (earlier, later) quartile pairs, widest separation first.
_QUARTILE_PAIRS: Tuple[Tuple[int, int], ...] = (
    (0, 3),
    (0, 2),
    (1, 3),
    (1, 2),
    (0, 1),
    (2, 3),
)


@dataclass(frozen=True)
class TimeSync:
    rd: int
    ts_received: int
    ts_sent: str
    ak: int
    round_trip: int


@dataclass(frozen=True)
class TimeSyncMap:
    """Two reference points pairing device time (``te``, ms) with host time (``tl``, s)."""

    te0: float
    te1: float
    tl0: float
    tl1: float
    syncs_received: int
    emotibit_start_time: float
    emotibit_end_time: float
    parse_version: str

    def to_local_time(self, timestamp: float) -> float:
        """Convert a device timestamp into host epoch seconds."""
        span = self.te1 - self.te0
        if span == 0:
            raise TimeSyncError("time sync reference points share the same device time")
        return self.tl0 + (float(timestamp) - self.te0) * (self.tl1 - self.tl0) / span


def find_syncs(items: PacketSource) -> List[TimeSync]:
    """Collect every consecutive RD, TL, AK triple among the sync packets."""
    sync_packets: List[DataPacket] = [p for p in iter_packets(items) if p.type_tag in SYNC_TAGS]

    syncs: List[TimeSync] = []
    for rd, tl, ak in zip(sync_packets, sync_packets[1:], sync_packets[2:]):
        if (rd.type_tag, tl.type_tag, ak.type_tag) != SYNC_TAGS:
            continue
        ts_sent = str(tl.payload[0]) if tl.payload else ""
        syncs.append(
            TimeSync(
                rd=rd.timestamp,
                ts_received=tl.timestamp,
                ts_sent=ts_sent,
                ak=ak.timestamp,
                round_trip=tl.timestamp - rd.timestamp,
            )
        )
    return syncs


def _shortest_round_trip(syncs: Sequence[TimeSync]) -> Optional[TimeSync]:
    if not syncs:
        return None
    return min(syncs, key=lambda s: s.round_trip)


def _quartiles(syncs: Sequence[TimeSync]) -> List[Sequence[TimeSync]]:
    size = math.ceil(len(syncs) / 4)
    chunks = [syncs[i : i + size] for i in range(0, len(syncs), size)]
    chunks.extend([] for _ in range(4 - len(chunks)))
    return chunks


def parse_local_time(ts_sent: str) -> float:
    """
    Convert a TL time string such as ``2019-07-11_15-14-25-583197`` into epoch seconds.

    The part after the last ``-`` is the fractional second; the rest is local time.
    """
    head, sep, tail = ts_sent.rpartition("-")
    if not sep or not tail.isdigit():
        raise TimeSyncError(f"bad TL time string: {ts_sent!r}")
    try:
        moment = datetime.strptime(head, TL_TIME_FORMAT)
    except ValueError as exc:
        raise TimeSyncError(f"bad TL time string: {ts_sent!r}") from exc
    return moment.timestamp() + int(tail) / 10 ** len(tail)


def _reference_point(sync: TimeSync) -> Tuple[float, float]:
    """Return (host seconds, device ms) for one sync, host time shifted by half the round trip."""
    host = parse_local_time(sync.ts_sent) + sync.round_trip / 2.0 / 1000.0
    return host, float(sync.ts_received)


def generate_sync_map(items: PacketSource) -> TimeSyncMap:
    """
    Build a :class:`TimeSyncMap` from a recording's packets.

    Raises
    ------
    TimeSyncError
        If there are no packets, no syncs, or no two quartiles with a sync.
    """
    packets = list(iter_packets(items))
    if not packets:
        raise TimeSyncError("no packets to build a time sync map from")
    timestamps = [p.timestamp for p in packets]

    syncs = find_syncs(packets)
    if not syncs:
        raise TimeSyncError("no RD/TL/AK time syncs found")

    best = [_shortest_round_trip(q) for q in _quartiles(syncs)]
    chosen = None
    for first, second in _QUARTILE_PAIRS:
        if best[first] is not None and best[second] is not None:
            chosen = (best[first], best[second])
            break
    if chosen is None:
        raise TimeSyncError(f"cannot generate a time sync map from {len(syncs)} sync(s)")

    tl0, te0 = _reference_point(chosen[0])
    tl1, te1 = _reference_point(chosen[1])
    logger.debug("Time sync map from %d syncs: te=(%s, %s) tl=(%s, %s)", len(syncs), te0, te1, tl0, tl1)

    return TimeSyncMap(
        te0=te0,
        te1=te1,
        tl0=tl0,
        tl1=tl1,
        syncs_received=len(syncs),
        emotibit_start_time=float(min(timestamps)),
        emotibit_end_time=float(max(timestamps)),
        parse_version=f"emotibit-data.{__version__}",
    )


__all__ = [
    "TimeSync",
    "TimeSyncMap",
    "find_syncs",
    "generate_sync_map",
    "parse_local_time",
]
