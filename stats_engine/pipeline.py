from typing import Any

from stats_engine.intervals import (
    determine_aggregation_interval,
    interval_seconds,
    next_coarser_interval,
)
from stats_engine.models import (
    METRIC_UNITS,
    AggregationMetadata,
    DeviceStats,
    MetricSeries,
    RequestParams,
    Sample,
    TimeRange,
)
from stats_engine.processors.downsample import downsample
from stats_engine.processors.metrics import aggregate_metric
from stats_engine.processors.normalizer import normalize_payload
from stats_engine.utils.logger import get_logger


MAX_RESPONSE_SIZE_BYTES = 900_000

BASE_RESPONSE_BYTES = 500
BYTES_PER_POINT = 150

NO_DATA_WARNING = "No data found for the specified time range and metrics"

logger = get_logger(__name__)


def estimate_response_size(response: DeviceStats) -> int:
    return BASE_RESPONSE_BYTES + response.total_points * BYTES_PER_POINT


def _build_attempt(
    raw_data: dict[str, list[Sample]],
    params: RequestParams,
    interval: str,
    warnings: list[str],
    device_name: str | None,
) -> DeviceStats:
    seconds = interval_seconds(interval)

    metrics = []
    raw_points = 0
    for metric, samples in raw_data.items():
        raw_points += len(samples)
        aggregated = aggregate_metric(samples, metric, seconds, params.from_, params.to)
        if len(aggregated) > params.max_points:
            aggregated = downsample(aggregated, params.max_points)
        metrics.append(MetricSeries(metric=metric, unit=METRIC_UNITS[metric], data=tuple(aggregated)))

    # Set only in raw mode, when a series came out shorter than its samples.
    downsampled = seconds == 0 and any(
        len(series.data) < len(raw_data[series.metric]) for series in metrics
    )

    return DeviceStats(
        device_id=params.device_id,
        device_name=device_name,
        time_range=TimeRange(from_=params.from_, to=params.to),
        aggregation=AggregationMetadata(
            method=interval,
            interval_seconds=seconds,
            total_points=sum(len(series.data) for series in metrics),
            raw_points_count=raw_points,
            downsampled=downsampled,
            warnings=tuple(warnings),
        ),
        metrics=tuple(metrics),
    )


def ensure_response_fits(
    raw_data: dict[str, list[Sample]],
    params: RequestParams,
    device_name: str | None = None,
) -> DeviceStats:
    """Aggregate ``raw_data`` at coarser and coarser intervals until it fits.

    Starts from the interval picked for the requested span and moves up the
    interval ladder while the size estimate exceeds
    ``MAX_RESPONSE_SIZE_BYTES``. When the ladder runs out the last attempt
    is returned as is.
    """
    interval = determine_aggregation_interval(params.span_seconds, params.aggregation)
    warnings: list[str] = []
    log = logger.bind(device_id=params.device_id)

    while True:
        response = _build_attempt(raw_data, params, interval, warnings, device_name)
        estimated_size = estimate_response_size(response)
        if estimated_size <= MAX_RESPONSE_SIZE_BYTES:
            break

        coarser = next_coarser_interval(interval)
        if coarser is None:
            log.warning(
                "aggregation_oversized",
                interval=interval,
                estimated_size=estimated_size,
            )
            break

        log.warning(
            "aggregation_escalated",
            interval=interval,
            next_interval=coarser,
            estimated_size=estimated_size,
        )
        warnings.append(f"Response size exceeded limit, increased aggregation to {coarser}")
        interval = coarser

    log.info(
        "aggregation_completed",
        method=response.aggregation.method,
        total_points=response.aggregation.total_points,
        raw_points_count=response.aggregation.raw_points_count,
    )
    return response


def aggregate_device_stats(
    payload: Any,
    params: RequestParams,
    device_name: str | None = None,
) -> DeviceStats:
    """Turn a raw controller stats payload into bounded aggregated series.

    ``params`` must come from a successful ``validate_params`` call.
    """
    raw_data = normalize_payload(payload, params.metrics)

    if not raw_data:
        interval = determine_aggregation_interval(params.span_seconds, params.aggregation)
        logger.info("stats_no_data", device_id=params.device_id, metrics=list(params.metrics))
        return DeviceStats(
            device_id=params.device_id,
            device_name=device_name,
            time_range=TimeRange(from_=params.from_, to=params.to),
            aggregation=AggregationMetadata(
                method=interval,
                interval_seconds=interval_seconds(interval),
                total_points=0,
                raw_points_count=0,
                warnings=(NO_DATA_WARNING,),
            ),
        )

    return ensure_response_fits(raw_data, params, device_name)
