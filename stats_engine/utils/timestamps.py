import math
from typing import NewType


# Unix epoch seconds. Device history endpoints elsewhere speak milliseconds;
# keep the two apart at the type level instead of passing bare ints around.
UnixSeconds = NewType("UnixSeconds", int)


def to_unix_seconds(value: float) -> UnixSeconds:
    return UnixSeconds(math.floor(value))


def floor_to_interval(timestamp: int, interval_seconds: int) -> int:
    return (timestamp // interval_seconds) * interval_seconds
