"""
Get Shop Info use case.

Shows the merchant admin which installed shop its token belongs to.
"""

from douanier.application.use_cases.guards import require_shop
from douanier.domain.entities.shop import Shop
from douanier.domain.repositories.i_shop_repository import IShopRepository


class GetShopInfo:
    """Resolve the caller's installed shop."""

    def __init__(self, shop_repository: IShopRepository):
        self.shop_repository = shop_repository

    async def execute(self, shop_domain: str) -> Shop:
        """
        Execute shop lookup.

        Raises:
            EntityNotFoundError: If no active shop has this domain
        """
        return await require_shop(self.shop_repository, shop_domain)
