from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

class DeviceStatsRequest(BaseModel):
    """Fields are left untyped; validate_params reports request errors."""
    model_config = ConfigDict(populate_by_name=True)

    device_id: Any = None
    from_: Any = Field(None, alias="from")
    to: Any = None
    aggregation: Any = None
    max_points: Any = None
    metrics: Any = None
    device_name: Optional[str] = None
    payload: Any = None

    def engine_params(self) -> dict:
        return {
            "device_id": self.device_id,
            "from": self.from_,
            "to": self.to,
            "aggregation": self.aggregation,
            "max_points": self.max_points,
            "metrics": self.metrics,
        }

class AggregatedPointResponse(BaseModel):
    timestamp: int
    avg: float
    min: float
    max: float
    count: int
    sum: Optional[float] = None

class MetricSeriesResponse(BaseModel):
    metric: str
    unit: str
    data: List[AggregatedPointResponse]

class TimeRangeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: int = Field(alias="from")
    to: int
    span_seconds: int

class AggregationMetadataResponse(BaseModel):
    method: str
    interval_seconds: int
    total_points: int
    raw_points_count: int
    downsampled: Optional[bool] = None
    warnings: Optional[List[str]] = None

class DeviceStatsResponse(BaseModel):
    device_id: int
    device_name: Optional[str] = None
    time_range: TimeRangeResponse
    aggregation: AggregationMetadataResponse
    metrics: List[MetricSeriesResponse]

class IntervalTableResponse(BaseModel):
    intervals: Dict[str, int]
    auto_thresholds: List[Dict[str, Any]]
    metric_units: Dict[str, str]
    default_max_points: int
    max_response_size_bytes: int
