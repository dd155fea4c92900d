"""
Merchant authentication for the management endpoints.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from douanier.domain.exceptions import AuthenticationError
from douanier.infrastructure.auth.jwt_handler import extract_shop_domain

# Missing header is reported through the domain error handler
security = HTTPBearer(auto_error=False)


async def get_current_shop(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Extract the merchant's shop domain from the bearer token.

    Args:
        credentials: HTTP Authorization header with Bearer token

    Returns:
        Shop domain from the token's shop claim

    Raises:
        AuthenticationError: If header missing, token invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing bearer token")

    return extract_shop_domain(credentials.credentials)
