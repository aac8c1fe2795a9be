from dataclasses import dataclass, field

from stats_engine.utils.timestamps import UnixSeconds


METRIC_UNITS = {
    "power": "W",
    "energy": "kWh",
    "voltage": "V",
    "current": "A",
}

ALL_METRICS = tuple(METRIC_UNITS)

DEFAULT_MAX_POINTS = 1000


@dataclass(frozen=True)
class Sample:
    timestamp: int
    value: float


@dataclass(frozen=True)
class AggregatedPoint:
    timestamp: int
    avg: float
    min: float
    max: float
    count: int
    sum: float | None = None

    def to_dict(self) -> dict:
        data = {
            "timestamp": self.timestamp,
            "avg": self.avg,
            "min": self.min,
            "max": self.max,
            "count": self.count,
        }
        if self.sum is not None:
            data["sum"] = self.sum
        return data


@dataclass(frozen=True)
class RequestParams:
    device_id: int
    from_: UnixSeconds
    to: UnixSeconds
    aggregation: str = "auto"
    max_points: int = DEFAULT_MAX_POINTS
    metrics: tuple[str, ...] = ALL_METRICS

    @property
    def span_seconds(self) -> int:
        return self.to - self.from_


@dataclass(frozen=True)
class AggregationMetadata:
    method: str
    interval_seconds: int
    total_points: int
    raw_points_count: int
    downsampled: bool | None = None
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        data = {
            "method": self.method,
            "interval_seconds": self.interval_seconds,
            "total_points": self.total_points,
            "raw_points_count": self.raw_points_count,
        }
        if self.downsampled is not None:
            data["downsampled"] = self.downsampled
        if self.warnings:
            data["warnings"] = list(self.warnings)
        return data


@dataclass(frozen=True)
class MetricSeries:
    metric: str
    unit: str
    data: tuple[AggregatedPoint, ...]

    def to_dict(self) -> dict:
        return {
            "metric": self.metric,
            "unit": self.unit,
            "data": [point.to_dict() for point in self.data],
        }


@dataclass(frozen=True)
class TimeRange:
    from_: UnixSeconds
    to: UnixSeconds

    @property
    def span_seconds(self) -> int:
        return self.to - self.from_

    def to_dict(self) -> dict:
        return {"from": self.from_, "to": self.to, "span_seconds": self.span_seconds}


@dataclass(frozen=True)
class DeviceStats:
    device_id: int
    time_range: TimeRange
    aggregation: AggregationMetadata
    metrics: tuple[MetricSeries, ...] = field(default_factory=tuple)
    device_name: str | None = None

    @property
    def total_points(self) -> int:
        return sum(len(series.data) for series in self.metrics)

    def to_dict(self) -> dict:
        data = {"device_id": self.device_id}
        if self.device_name is not None:
            data["device_name"] = self.device_name
        data["time_range"] = self.time_range.to_dict()
        data["aggregation"] = self.aggregation.to_dict()
        data["metrics"] = [series.to_dict() for series in self.metrics]
        return data
