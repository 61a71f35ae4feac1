"""
Domain errors raised by the practice test services

Each error carries the HTTP status it maps to; main.py turns them into
JSON responses.
"""


class PracticeTestError(Exception):
    """Base class for caller-correctable practice test errors"""

    status_code = 400
    error = "practice_test_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PracticeTestError):
    status_code = 404
    error = "not_found"

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class InsufficientPoolError(PracticeTestError):
    """Fewer eligible questions than the configuration asks for"""

    status_code = 400
    error = "insufficient_pool"

    def __init__(self, available: int, requested: int):
        super().__init__(
            "Not enough questions available for the requested configuration "
            f"({available} available, {requested} requested)"
        )
        self.available = available
        self.requested = requested


class ConfigurationValidationError(PracticeTestError):
    status_code = 400
    error = "validation_error"


class PermissionDeniedError(PracticeTestError):
    status_code = 403
    error = "forbidden"
