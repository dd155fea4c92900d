"""
Domain exceptions package.
"""

# Auth exceptions
from douanier.domain.exceptions.auth import (
    AuthenticationError,
    ExpiredTokenError,
    InvalidTokenError,
)

# Base exceptions
from douanier.domain.exceptions.base import (
    ConflictError,
    DouanierException,
    EntityNotFoundError,
    UnauthorizedError,
    ValidationError,
)

# Blockchain exceptions
from douanier.domain.exceptions.blockchain import (
    BlockchainError,
    InvalidAddressError,
    RemoteUnavailableError,
    UnsupportedChainError,
)

# Discount exceptions
from douanier.domain.exceptions.discount import (
    CustomerLimitReachedError,
    DiscountExpiredError,
    DiscountNotStartedError,
    DiscountRuleNotFoundError,
    UsageLimitReachedError,
)

# Session exceptions
from douanier.domain.exceptions.session import (
    InvalidSignatureError,
    SessionAlreadyProcessedError,
    SessionExpiredError,
    SessionNotFoundError,
    UnverifiedSessionError,
)

__all__ = [
    # Base
    "DouanierException",
    "EntityNotFoundError",
    "ValidationError",
    "ConflictError",
    "UnauthorizedError",
    # Auth
    "AuthenticationError",
    "InvalidTokenError",
    "ExpiredTokenError",
    # Session
    "SessionNotFoundError",
    "SessionAlreadyProcessedError",
    "SessionExpiredError",
    "InvalidSignatureError",
    "UnverifiedSessionError",
    # Blockchain
    "BlockchainError",
    "UnsupportedChainError",
    "InvalidAddressError",
    "RemoteUnavailableError",
    # Discount
    "DiscountRuleNotFoundError",
    "DiscountNotStartedError",
    "DiscountExpiredError",
    "UsageLimitReachedError",
    "CustomerLimitReachedError",
]
