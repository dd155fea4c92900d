"""API middleware."""

from douanier.presentation.api.middleware.error_handler import (
    douanier_exception_handler,
    error_response,
    unhandled_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "douanier_exception_handler",
    "validation_exception_handler",
    "unhandled_exception_handler",
    "error_response",
]
