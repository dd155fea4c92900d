"""
Shop repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from douanier.domain.entities.shop import Shop


class IShopRepository(ABC):
    """Interface for shop persistence operations."""

    @abstractmethod
    async def create(self, shop: Shop) -> Shop:
        """
        Create new shop.

        Args:
            shop: Shop entity to create

        Returns:
            Created shop entity
        """

    @abstractmethod
    async def get_by_domain(self, shop_domain: str) -> Optional[Shop]:
        """
        Get active shop by domain.

        Args:
            shop_domain: Shop domain (e.g., "store.myshopify.com")

        Returns:
            Shop entity if found and active, None otherwise
        """
