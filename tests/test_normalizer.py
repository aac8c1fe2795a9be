"""
Raw payload normalization
"""
import math

import pytest

from stats_engine.models import Sample
from stats_engine.processors.normalizer import (
    extract_metric_samples,
    normalize_payload,
    parse_entry,
)


def test_parses_tuple_entries():
    assert parse_entry([1000, 5], "power") == Sample(1000, 5.0)
    assert parse_entry((1000, 2.5, "extra"), "power") == Sample(1000, 2.5)


@pytest.mark.parametrize("entry", [
    {"timestamp": 1000, "value": 100},
    {"time": 1000, "v": 100},
    {"ts": 1000, "reading": 100},
    {"t": 1000, "avg": 100},
    {"date": 1000, "power": 100},
    {"timestamp": 1000, "powerValue": 100},
])
def test_parses_known_field_names(entry):
    assert parse_entry(entry, "power") == Sample(1000, 100.0)


def test_first_present_field_wins():
    entry = {"timestamp": 1000, "time": 2000, "value": 1, "avg": 2}
    assert parse_entry(entry, "power") == Sample(1000, 1.0)


def test_null_fields_fall_through_to_next_name():
    entry = {"timestamp": None, "ts": 1000, "value": None, "v": 7}
    assert parse_entry(entry, "power") == Sample(1000, 7.0)


def test_zero_is_a_present_value():
    assert parse_entry({"timestamp": 0, "value": 0}, "energy") == Sample(0, 0.0)


@pytest.mark.parametrize("entry", [
    None,
    [1000],
    "1000,5",
    42,
    {"timestamp": 1000},
    {"value": 5},
    {"timestamp": "1000", "value": 5},
    {"timestamp": 1000, "value": "5"},
    {"timestamp": 1000, "value": math.nan},
    {"timestamp": 1000, "value": math.inf},
    {"timestamp": math.nan, "value": 5},
    {"timestamp": 1000, "value": True},
])
def test_drops_unusable_entries(entry):
    assert parse_entry(entry, "power") is None


def test_floors_fractional_timestamps():
    assert parse_entry([1000.9, 1], "power").timestamp == 1000


def test_extract_sorts_and_drops():
    entries = [[1060, 2], None, [1000, 1], {"timestamp": 1030, "value": math.nan}, [1030, 3]]
    assert extract_metric_samples(entries, "power") == [
        Sample(1000, 1.0),
        Sample(1030, 3.0),
        Sample(1060, 2.0),
    ]


def test_extract_ignores_non_list_input():
    assert extract_metric_samples({"timestamp": 1000, "value": 1}, "power") == []
    assert extract_metric_samples(None, "power") == []


def test_object_payload_uses_metric_keys():
    payload = {
        "power": [[1000, 100]],
        "energyData": [[1000, 50]],
        "voltage": [],
    }
    raw = normalize_payload(payload, ["power", "energy", "voltage", "current"])
    assert list(raw) == ["power", "energy"]
    assert raw["energy"] == [Sample(1000, 50.0)]


def test_array_payload_is_shared_by_all_metrics():
    payload = [
        {"timestamp": 1000, "power": 100, "voltage": 230},
        {"timestamp": 1060, "power": 110},
    ]
    raw = normalize_payload(payload, ["power", "voltage", "current"])
    assert len(raw["power"]) == 2
    assert raw["voltage"] == [Sample(1000, 230.0)]
    assert "current" not in raw


def test_unexpected_payload_yields_nothing():
    assert normalize_payload("garbage", ["power"]) == {}
    assert normalize_payload(None, ["power"]) == {}


def test_empty_metric_array_does_not_fall_back_to_data_key():
    payload = {"power": [], "powerData": [[1000, 1]], "energy": None, "energyData": [[1000, 5]]}
    raw = normalize_payload(payload, ["power", "energy"])
    assert "power" not in raw
    assert raw["energy"] == [Sample(1000, 5.0)]
