"""
JWT token handler for merchant authentication.

Merchant tokens are issued by the onboarding flow; the service only
needs to validate them and read the shop they were issued for.
"""

from typing import Dict

from jose import JWTError, jwt

from douanier.config.settings import get_settings
from douanier.domain.exceptions.auth import ExpiredTokenError, InvalidTokenError


def decode_merchant_token(token: str) -> Dict[str, str]:
    """
    Decode and validate a merchant JWT.

    Args:
        token: JWT token string

    Returns:
        Dictionary with decoded payload (shop)

    Raises:
        ExpiredTokenError: If token has expired
        InvalidTokenError: If token is invalid or has no shop claim
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except JWTError:
        raise InvalidTokenError()

    shop = payload.get("shop")
    if not shop or not isinstance(shop, str):
        raise InvalidTokenError()

    return {"shop": shop.strip().lower()}


def extract_shop_domain(token: str) -> str:
    """
    Extract shop domain from token.

    Args:
        token: JWT token string

    Returns:
        Shop domain string

    Raises:
        InvalidTokenError: If token is invalid
    """
    return decode_merchant_token(token)["shop"]
