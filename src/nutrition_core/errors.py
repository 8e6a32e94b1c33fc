"""Exception taxonomy for the nutrition core.

Every error carries an HTTP-style status code and a details mapping so the
API layer can render it without knowing the concrete type.
"""


class NutritionCoreError(Exception):
    """Base class for all nutrition core errors."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, object] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidProfile(NutritionCoreError):  # noqa: N818
    """Raised when profile fields are missing or out of range."""

    status_code = 422

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, {"field": field} if field else None)
        self.field = field


class InvalidGoals(NutritionCoreError):  # noqa: N818
    """Raised when a goals record has non-positive values."""

    status_code = 422


class InvalidActivityDate(NutritionCoreError, ValueError):  # noqa: N818
    """Raised when a streak event date cannot be parsed."""

    status_code = 422


class ExternalStoreFailure(NutritionCoreError):  # noqa: N818
    """Raised when the persistence layer fails."""

    status_code = 502

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message, {"operation": operation} if operation else None)
        self.operation = operation


class EstimatorFailure(NutritionCoreError):  # noqa: N818
    """Raised when the AI estimator fails or returns an unusable payload."""

    status_code = 502


class InvalidTimezone(NutritionCoreError):  # noqa: N818
    """Raised when a timezone name is not a known IANA zone."""

    status_code = 422
