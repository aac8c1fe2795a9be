import math

from stats_engine.models import AggregatedPoint


def triangle_area(a: AggregatedPoint, b: AggregatedPoint, c: AggregatedPoint) -> float:
    # Twice the area; only used for comparisons.
    return abs(
        (a.timestamp - c.timestamp) * (b.avg - a.avg)
        - (a.timestamp - b.timestamp) * (c.avg - a.avg)
    )


def downsample(points: list[AggregatedPoint], max_points: int) -> list[AggregatedPoint]:
    """Reduce ``points`` to ``max_points`` while keeping the curve's shape.

    Largest-triangle-three-buckets, simplified: the third vertex is the
    first point of the next range rather than the average of that range.
    The first and last points are always kept.
    """
    if len(points) <= max_points or max_points <= 2:
        return points

    last_index = len(points) - 1
    middle_count = max_points - 2
    range_size = (len(points) - 2) / middle_count

    result = [points[0]]
    for i in range(middle_count):
        range_start = math.floor(1 + i * range_size)
        range_end = min(math.floor(1 + (i + 1) * range_size), last_index)

        previous = result[-1]
        reference = points[range_end]

        best_area = -1.0
        best_index = range_start
        for j in range(range_start, range_end):
            area = triangle_area(previous, points[j], reference)
            if area > best_area:
                best_area = area
                best_index = j

        result.append(points[best_index])

    result.append(points[last_index])
    return result
