from __future__ import annotations

import numpy as np
import pytest

from emotibit_data.analysis.streams import (
    average_heart_rate,
    extract_values,
    filter_by_tag,
    group_by_tag,
    mean_value,
)
from emotibit_data.core.batch_reader import read_lines
from emotibit_data.core.models import DataPacket


def _packet(tag: str, *payload, packet: int = 0) -> DataPacket:
    return DataPacket(
        timestamp=1000 + packet,
        packet_number=packet,
        data_length=len(payload),
        type_tag=tag,
        reserved=(1, 100),
        payload=tuple(payload),
    )


MIXED = [
    _packet("HR", 60, packet=0),
    _packet("PI", 156593, 156471, packet=1),
    _packet("HR", 80, packet=2),
    _packet("EA", 0.5, packet=3),
    _packet("HR", 70, 71, packet=4),
]


def test_filter_by_tag_keeps_order() -> None:
    assert [p.packet_number for p in filter_by_tag(MIXED, "HR")] == [0, 2, 4]


def test_average_heart_rate_uses_first_value_of_matching_packets() -> None:
    assert average_heart_rate(MIXED) == pytest.approx(70.0)


def test_mean_value_without_matches_is_none() -> None:
    assert mean_value(MIXED, "T1") is None
    assert average_heart_rate([]) is None


def test_extract_values_returns_float_array() -> None:
    values = extract_values(MIXED, "HR")

    assert values.dtype == np.float64
    np.testing.assert_array_equal(values, np.array([60.0, 80.0, 70.0]))


def test_extract_values_skips_short_payloads() -> None:
    np.testing.assert_array_equal(extract_values(MIXED, "HR", index=1), np.array([71.0]))
    assert extract_values(MIXED, "HR", index=5).size == 0


def test_extract_values_ignores_text_values() -> None:
    packets = [_packet("TX_LC_LM", "LC", 1.5, "LM", 2.0)]
    assert extract_values(packets, "TX_LC_LM", index=0).size == 0
    np.testing.assert_array_equal(extract_values(packets, "TX_LC_LM", index=1), np.array([1.5]))


def test_group_by_tag() -> None:
    groups = group_by_tag(MIXED)

    assert list(groups) == ["HR", "PI", "EA"]
    assert len(groups["HR"]) == 3


def test_batch_results_are_accepted_and_failures_skipped() -> None:
    batch = read_lines(
        [
            "1000,1,1,HR,1,100,64",
            "1020,2,1,HR,1,100,not-a-number",
            "1040,3,1,PI,1,100,156000",
            "1060,4,1,HR,1,100,66",
        ]
    )

    assert len(batch.errors) == 1
    assert average_heart_rate(batch) == pytest.approx(65.0)
    assert mean_value(batch.results, "PI") == pytest.approx(156000.0)
