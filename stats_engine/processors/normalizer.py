import math
from typing import Any, Iterable

from stats_engine.models import Sample
from stats_engine.utils.logger import get_logger
from stats_engine.utils.timestamps import to_unix_seconds


TIMESTAMP_KEYS = ("timestamp", "time", "t", "ts", "date")

logger = get_logger(__name__)


def _value_keys(metric: str) -> tuple[str, ...]:
    return ("value", "v", metric, f"{metric}Value", "avg", "reading")


def _first_present(item: dict, keys: Iterable[str]) -> Any:
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return None


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def parse_entry(entry: Any, metric: str) -> Sample | None:
    """Parse one raw upstream entry.

    Accepts ``[timestamp, value]`` pairs and objects using any of the
    field names the controller is known to emit. Returns ``None`` when the
    entry has to be dropped.
    """
    if entry is None:
        return None

    if isinstance(entry, (list, tuple)):
        if len(entry) < 2:
            return None
        timestamp, value = entry[0], entry[1]
    elif isinstance(entry, dict):
        timestamp = _first_present(entry, TIMESTAMP_KEYS)
        value = _first_present(entry, _value_keys(metric))
    else:
        return None

    if not is_finite_number(timestamp) or not is_finite_number(value):
        return None
    return Sample(timestamp=to_unix_seconds(timestamp), value=float(value))


def extract_metric_samples(entries: Any, metric: str) -> list[Sample]:
    if not isinstance(entries, (list, tuple)):
        return []

    samples = []
    dropped = 0
    for entry in entries:
        sample = parse_entry(entry, metric)
        if sample is None:
            dropped += 1
            continue
        samples.append(sample)

    if dropped:
        logger.debug("samples_dropped", metric=metric, dropped=dropped, kept=len(samples))

    samples.sort(key=lambda sample: sample.timestamp)
    return samples


def normalize_payload(payload: Any, metrics: Iterable[str]) -> dict[str, list[Sample]]:
    """Build the per-metric sample lists for a raw stats payload.

    The payload is either one array shared by every metric or an object
    holding an array per metric under ``<metric>`` or, when that key is
    missing or null, ``<metric>Data``.
    Metrics without a single usable sample are left out.
    """
    raw_data: dict[str, list[Sample]] = {}

    for metric in metrics:
        if isinstance(payload, (list, tuple)):
            entries = payload
        elif isinstance(payload, dict):
            entries = payload.get(metric)
            if entries is None:
                entries = payload.get(f"{metric}Data")
        else:
            entries = []

        samples = extract_metric_samples(entries, metric)
        if samples:
            raw_data[metric] = samples

    return raw_data
