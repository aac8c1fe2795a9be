from stats_engine.models import Sample
from stats_engine.utils.timestamps import floor_to_interval


def group_into_buckets(
    samples: list[Sample],
    interval_seconds: int,
    from_: int,
    to: int,
) -> dict[int, list[Sample]]:
    """Group samples into fixed-width buckets keyed by bucket start.

    With ``interval_seconds <= 0`` every sample is its own bucket. Buckets
    starting more than one interval before ``from_`` or after ``to`` are
    skipped. Keys come back in ascending order.
    """
    buckets: dict[int, list[Sample]] = {}

    if interval_seconds <= 0:
        for sample in samples:
            buckets[sample.timestamp] = [sample]
        return dict(sorted(buckets.items()))

    lower_bound = from_ - interval_seconds
    for sample in samples:
        bucket_start = floor_to_interval(sample.timestamp, interval_seconds)
        if bucket_start < lower_bound or bucket_start > to:
            continue
        bucket = buckets.get(bucket_start)
        if bucket is None:
            buckets[bucket_start] = [sample]
        else:
            bucket.append(sample)

    return dict(sorted(buckets.items()))
