"""CSV writing helpers for parsed packets."""

import csv
from pathlib import Path
from typing import Iterable, List

from ..core.models import DataPacket


def packet_row(packet: DataPacket) -> List[str]:
    """Return the canonical device row for ``packet``."""
    return packet.to_tokens()


def write_packets(path: Path, packets: Iterable[DataPacket]) -> None:
    """
    Write packets back in the raw device layout (no header row).

    Directories are created as needed. The output parses back into equal
    packets.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile, lineterminator="\n", quoting=csv.QUOTE_NONE, escapechar=None, quotechar=None)
        writer.writerows(packet_row(p) for p in packets)
