"""
Base domain exceptions.
"""


class DouanierException(Exception):
    """Base exception for all Douanier domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class EntityNotFoundError(DouanierException):
    """Raised when entity is not found in repository."""

    def __init__(self, entity_type: str, entity_id: str):
        message = f"{entity_type} with ID {entity_id} not found"
        super().__init__(message, code="ENTITY_NOT_FOUND")


class ValidationError(DouanierException):
    """Raised when input or entity validation fails."""

    def __init__(self, field: str, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.reason = reason


class ConflictError(DouanierException):
    """Raised when the current state forbids the requested transition."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, code=code)


class UnauthorizedError(DouanierException):
    """Raised when the caller lacks a valid proof of identity."""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(message, code=code)
