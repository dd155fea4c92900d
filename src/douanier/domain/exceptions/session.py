"""
Verification session exceptions.
"""

from douanier.domain.exceptions.base import (
    ConflictError,
    DouanierException,
    UnauthorizedError,
)


class SessionNotFoundError(DouanierException):
    """Raised when no session exists for the given token."""

    def __init__(self):
        super().__init__("Session not found", code="SESSION_NOT_FOUND")


class SessionAlreadyProcessedError(ConflictError):
    """Raised when a session has already left the pending state."""

    def __init__(self, status: str):
        super().__init__(
            "Session already processed",
            code="SESSION_ALREADY_PROCESSED",
        )
        self.status = status


class SessionExpiredError(ConflictError):
    """Raised when a pending session is consumed after its expiry."""

    def __init__(self):
        super().__init__("Session expired", code="SESSION_EXPIRED")


class InvalidSignatureError(ConflictError):
    """Raised when the signature does not prove ownership of the wallet."""

    def __init__(self):
        super().__init__("Invalid signature", code="INVALID_SIGNATURE")


class UnverifiedSessionError(UnauthorizedError):
    """Raised when an operation needs a verified session bound to the caller."""

    def __init__(self, message: str = "Invalid or unverified session"):
        super().__init__(message, code="UNVERIFIED_SESSION")
