"""
Merchant token issuance for tests.

In production merchant tokens come from the onboarding flow; the
service itself only validates them.
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from douanier.config.settings import get_settings


def create_merchant_token(shop_domain: str) -> str:
    """
    Create a merchant JWT signed with the configured secret.

    Args:
        shop_domain: Shop the token grants access to

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": shop_domain,
        "shop": shop_domain,
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_EXPIRATION_HOURS),
        "type": "merchant",
    }
    return jwt.encode(
        payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )
