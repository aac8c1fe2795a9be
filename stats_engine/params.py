import math
from dataclasses import dataclass, field
from typing import Any

from stats_engine.intervals import VALID_AGGREGATIONS
from stats_engine.models import ALL_METRICS, DEFAULT_MAX_POINTS, RequestParams
from stats_engine.processors.normalizer import is_finite_number
from stats_engine.utils.timestamps import UnixSeconds


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    normalized: RequestParams | None = None


def _whole(value: Any) -> int | None:
    """Floor a finite number to an int; ``None`` for anything else."""
    if not is_finite_number(value):
        return None
    return math.floor(value)


def validate_params(params: dict) -> ValidationResult:
    """Check a stats request and fill in its defaults.

    Never raises: every broken rule adds one message to ``errors`` and the
    caller decides how to reject the request. ``normalized`` is only set
    when the request is valid. Optional fields set to ``None`` count as
    absent. Fractional numbers are floored before the rules are applied,
    so ``device_id=0.5`` or ``from=100.2, to=100.9`` are rejected.
    """
    errors = []

    device_id = _whole(params.get("device_id"))
    if device_id is None or device_id <= 0:
        errors.append("device_id must be a positive number")

    from_ = _whole(params.get("from"))
    to = _whole(params.get("to"))
    if from_ is None:
        errors.append("from timestamp is required")
    if to is None:
        errors.append("to timestamp is required")
    if from_ is not None and to is not None and from_ >= to:
        errors.append("from timestamp must be less than to timestamp")

    raw_max_points = params.get("max_points")
    max_points = DEFAULT_MAX_POINTS if raw_max_points is None else _whole(raw_max_points)
    if max_points is None or max_points <= 0:
        errors.append("max_points must be a positive number")

    aggregation = params.get("aggregation")
    if aggregation is None:
        aggregation = "auto"
    elif aggregation not in VALID_AGGREGATIONS:
        errors.append(
            f"Invalid aggregation interval: {aggregation}. "
            f"Valid values: {', '.join(VALID_AGGREGATIONS)}"
        )

    metrics = params.get("metrics")
    if metrics is None:
        metrics = ALL_METRICS
    elif not isinstance(metrics, (list, tuple)):
        errors.append(f"Invalid metric: {metrics}. Valid values: {', '.join(ALL_METRICS)}")
    else:
        for metric in metrics:
            if metric not in ALL_METRICS:
                errors.append(f"Invalid metric: {metric}. Valid values: {', '.join(ALL_METRICS)}")

    if errors:
        return ValidationResult(valid=False, errors=errors)

    normalized = RequestParams(
        device_id=device_id,
        from_=UnixSeconds(from_),
        to=UnixSeconds(to),
        aggregation=aggregation,
        max_points=max_points,
        metrics=tuple(metrics),
    )
    return ValidationResult(valid=True, normalized=normalized)
