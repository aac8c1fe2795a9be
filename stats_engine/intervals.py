from types import MappingProxyType


AGGREGATION_INTERVALS = MappingProxyType({
    "raw": 0,
    "1min": 60,
    "5min": 300,
    "15min": 900,
    "1hour": 3600,
    "6hour": 21600,
})

VALID_AGGREGATIONS = ("raw", "1min", "5min", "15min", "1hour", "6hour", "auto")

# Coarser intervals tried in order when a response is too large.
INTERVAL_PROGRESSION = ("raw", "1min", "5min", "15min", "1hour", "6hour")

# (max span in seconds, interval) pairs, first match wins.
AUTO_AGGREGATION_THRESHOLDS = (
    (3600, "raw"),
    (21600, "5min"),
    (86400, "15min"),
    (604800, "1hour"),
)


def determine_aggregation_interval(span_seconds: int, requested: str | None = None) -> str:
    if requested and requested != "auto":
        return requested

    for max_span, interval in AUTO_AGGREGATION_THRESHOLDS:
        if span_seconds <= max_span:
            return interval
    return "6hour"


def interval_seconds(interval: str) -> int:
    if interval == "auto":
        return AGGREGATION_INTERVALS["raw"]
    return AGGREGATION_INTERVALS[interval]


def next_coarser_interval(interval: str) -> str | None:
    try:
        index = INTERVAL_PROGRESSION.index(interval)
    except ValueError:
        index = 0
    if index + 1 >= len(INTERVAL_PROGRESSION):
        return None
    return INTERVAL_PROGRESSION[index + 1]
