"""Engine exceptions.

Request problems are reported by the validator as error strings, and bad
samples are dropped during normalization. What remains here are
programming errors that should never reach a caller.
"""


class AggregationError(Exception):
    """Base error for the aggregation engine."""


class EmptyBucketError(AggregationError):
    """Raised when a reducer is handed a bucket without samples."""

    def __init__(self, message: str = "Cannot aggregate empty sample list"):
        super().__init__(message)
