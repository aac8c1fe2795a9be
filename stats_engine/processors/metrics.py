from enum import Enum
from types import MappingProxyType

from stats_engine.exceptions import EmptyBucketError
from stats_engine.models import AggregatedPoint, Sample
from stats_engine.processors.buckets import group_into_buckets


class MetricKind(str, Enum):
    AVERAGE = "average"
    CUMULATIVE = "cumulative"


METRIC_KINDS = MappingProxyType({
    "power": MetricKind.AVERAGE,
    "voltage": MetricKind.AVERAGE,
    "current": MetricKind.AVERAGE,
    "energy": MetricKind.CUMULATIVE,
})


def aggregate_average(samples: list[Sample]) -> AggregatedPoint:
    if not samples:
        raise EmptyBucketError()

    values = [sample.value for sample in samples]
    return AggregatedPoint(
        timestamp=samples[0].timestamp,
        avg=sum(values) / len(values),
        min=min(values),
        max=max(values),
        count=len(values),
    )


def aggregate_energy(samples: list[Sample]) -> AggregatedPoint:
    """Reduce a bucket of cumulative energy readings.

    ``sum`` is the counter increase over the bucket. A decrease means the
    meter was reset and counts as zero consumption.
    """
    if not samples:
        raise EmptyBucketError()

    ordered = sorted(samples, key=lambda sample: sample.timestamp)
    values = [sample.value for sample in ordered]
    delta = values[-1] - values[0]

    return AggregatedPoint(
        timestamp=ordered[0].timestamp,
        avg=sum(values) / len(values),
        min=min(values),
        max=max(values),
        count=len(values),
        sum=delta if delta >= 0 else 0.0,
    )


REDUCERS = MappingProxyType({
    MetricKind.AVERAGE: aggregate_average,
    MetricKind.CUMULATIVE: aggregate_energy,
})


def aggregate_metric(
    samples: list[Sample],
    metric: str,
    interval_seconds: int,
    from_: int,
    to: int,
) -> list[AggregatedPoint]:
    if not samples:
        return []

    reducer = REDUCERS[METRIC_KINDS[metric]]
    buckets = group_into_buckets(samples, interval_seconds, from_, to)

    aggregated = []
    for bucket_start, bucket in buckets.items():
        # Order by original time before every sample is restamped to the bucket start.
        ordered = sorted(bucket, key=lambda sample: sample.timestamp)
        restamped = [Sample(bucket_start, sample.value) for sample in ordered]
        aggregated.append(reducer(restamped))
    return aggregated
