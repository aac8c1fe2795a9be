from dataclasses import replace

from stats_engine.models import AggregatedPoint, DeviceStats


def round_point(point: AggregatedPoint) -> AggregatedPoint:
    return replace(
        point,
        avg=round(point.avg, 2),
        min=round(point.min, 2),
        max=round(point.max, 2),
        sum=round(point.sum, 3) if point.sum is not None else None,
    )


def format_for_response(stats: DeviceStats) -> DeviceStats:
    """Round statistics for presentation: two decimals, three for ``sum``."""
    metrics = tuple(
        replace(series, data=tuple(round_point(point) for point in series.data))
        for series in stats.metrics
    )
    return replace(stats, metrics=metrics)
