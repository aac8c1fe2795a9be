"""
Throughput acceptance checks
"""
import math
import time

from stats_engine.models import AggregatedPoint, Sample
from stats_engine.processors.downsample import downsample
from stats_engine.processors.metrics import aggregate_metric

FROM = 1736294400


def test_aggregates_100k_samples_into_hourly_buckets_under_a_second():
    samples = [Sample(FROM + i, 100 + math.sin(i * 0.01) * 50) for i in range(100_000)]

    start = time.perf_counter()
    points = aggregate_metric(samples, "power", 3600, FROM, FROM + 100_000)
    duration = time.perf_counter() - start

    assert duration < 1.0
    assert len(points) < 30


def test_downsamples_10k_points_under_100ms():
    points = [
        AggregatedPoint(
            timestamp=1000 + i * 60,
            avg=100 + math.sin(i * 0.01) * 50,
            min=80 + math.sin(i * 0.01) * 40,
            max=120 + math.sin(i * 0.01) * 60,
            count=10,
        )
        for i in range(10_000)
    ]

    start = time.perf_counter()
    result = downsample(points, 1000)
    duration = time.perf_counter() - start

    assert duration < 0.1
    assert len(result) == 1000
