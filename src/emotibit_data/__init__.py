"""Parse EmotiBit raw packet lines into typed, validated packets.

Typical use::

    from emotibit_data import read_file, average_heart_rate

    batch = read_file("raw_data.csv")
    print(len(batch.packets), "packets,", len(batch.errors), "errors")
    print(average_heart_rate(batch))
"""

__version__ = "0.1.0"

from .analysis.streams import average_heart_rate, extract_values, filter_by_tag, mean_value
from .config.runtime import ParserConfig, load_config
from .core import (
    BatchResult,
    DataPacket,
    FieldParseError,
    LengthMismatchError,
    PacketError,
    ParseResult,
    PayloadParseError,
    StructuralError,
    UnrecognizedTagError,
    iter_results,
    parse_datagram,
    parse_line,
    read_file,
    read_lines,
    start_reader,
)

__all__ = [
    "__version__",
    "BatchResult",
    "DataPacket",
    "FieldParseError",
    "LengthMismatchError",
    "PacketError",
    "ParseResult",
    "ParserConfig",
    "PayloadParseError",
    "StructuralError",
    "UnrecognizedTagError",
    "average_heart_rate",
    "extract_values",
    "filter_by_tag",
    "iter_results",
    "load_config",
    "mean_value",
    "parse_datagram",
    "parse_line",
    "read_file",
    "read_lines",
    "start_reader",
]
