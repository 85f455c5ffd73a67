"""Error types raised by the calorie tracker."""


class CalorieTrackerError(Exception):
    """Base class for calorie tracker errors."""


class ParseError(CalorieTrackerError):
    """Raised when a stored record cannot be parsed into a domain model."""

    def __init__(self, message: str, record_id: object | None = None) -> None:
        super().__init__(message)
        self.record_id = record_id


class StoreError(CalorieTrackerError):
    """Raised when the record store rejects or drops a write."""


class RecognitionError(CalorieTrackerError):
    """Raised when the food-recognition service returns an unusable result."""
