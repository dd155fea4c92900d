"""
Lookups shared by storefront and merchant use cases.
"""

from douanier.domain.entities.shop import Shop
from douanier.domain.entities.verification_session import VerificationSession
from douanier.domain.exceptions import (
    EntityNotFoundError,
    UnverifiedSessionError,
    ValidationError,
)
from douanier.domain.repositories.i_shop_repository import IShopRepository
from douanier.domain.repositories.i_verification_session_repository import (
    IVerificationSessionRepository,
)


async def require_shop(shop_repository: IShopRepository, shop_domain: str) -> Shop:
    """
    Resolve an active shop by domain.

    Raises:
        ValidationError: If shop domain is empty
        EntityNotFoundError: If no active shop has this domain
    """
    if not shop_domain or not shop_domain.strip():
        raise ValidationError(field="shop", reason="Shop domain is required")

    shop = await shop_repository.get_by_domain(shop_domain)
    if not shop:
        raise EntityNotFoundError(entity_type="Shop", entity_id=shop_domain)

    return shop


async def require_verified_session(
    session_repository: IVerificationSessionRepository,
    session_token: str,
    shop_domain: str,
    wallet_address: str,
) -> VerificationSession:
    """
    Resolve a verified session bound to the calling shop and wallet.

    Raises:
        UnverifiedSessionError: If the session is missing, not verified
            or was issued for another shop or wallet
    """
    session = None
    if session_token:
        session = await session_repository.get_by_token(session_token)

    if not session or not session.is_verified():
        raise UnverifiedSessionError()

    if not session.is_bound_to(shop_domain or "", wallet_address or ""):
        raise UnverifiedSessionError(
            "Session was not issued for this shop and wallet"
        )

    return session
