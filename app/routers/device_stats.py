from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.core.deps import get_current_user
from app.schemas.device_stats import DeviceStatsRequest, DeviceStatsResponse, IntervalTableResponse
from app.schemas.response import ApiResponse
from stats_engine.exceptions import AggregationError
from stats_engine.formatter import format_for_response
from stats_engine.intervals import AGGREGATION_INTERVALS, AUTO_AGGREGATION_THRESHOLDS
from stats_engine.models import METRIC_UNITS
from stats_engine.params import DEFAULT_MAX_POINTS, validate_params
from stats_engine.pipeline import MAX_RESPONSE_SIZE_BYTES, aggregate_device_stats
from stats_engine.utils.logger import get_logger

router = APIRouter(
    prefix="/api/device-stats",
    tags=["Device Stats"],
    dependencies=[Depends(get_current_user)]
)

logger = get_logger(__name__)

@router.post("", response_model=ApiResponse[DeviceStatsResponse], response_model_exclude_none=True)
def aggregate_stats(
    data: DeviceStatsRequest,
    user_id: int = Depends(get_current_user)
):
    result = validate_params(data.engine_params())
    if not result.valid:
        logger.warning("stats_request_rejected", user_id=user_id, errors=result.errors)
        return JSONResponse(
            status_code=422,
            content={
                "code": 422,
                "message": "Validation error",
                "errors": result.errors
            }
        )

    params = result.normalized
    try:
        stats = aggregate_device_stats(data.payload, params, data.device_name)
    except AggregationError:
        logger.exception("stats_aggregation_failed", user_id=user_id, device_id=params.device_id)
        raise HTTPException(status_code=500, detail="Failed to aggregate device stats")

    return {
        "code": 200,
        "message": "Device stats aggregated",
        "data": format_for_response(stats).to_dict()
    }

@router.get("/intervals", response_model=ApiResponse[IntervalTableResponse])
def list_intervals():
    thresholds = [
        {"max_span_seconds": max_span, "interval": interval}
        for max_span, interval in AUTO_AGGREGATION_THRESHOLDS
    ]
    thresholds.append({"max_span_seconds": None, "interval": "6hour"})

    return {
        "code": 200,
        "message": "Aggregation intervals retrieved",
        "data": {
            "intervals": dict(AGGREGATION_INTERVALS),
            "auto_thresholds": thresholds,
            "metric_units": METRIC_UNITS,
            "default_max_points": DEFAULT_MAX_POINTS,
            "max_response_size_bytes": MAX_RESPONSE_SIZE_BYTES
        }
    }
