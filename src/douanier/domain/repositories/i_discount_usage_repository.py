"""
Customer discount usage repository interface.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from uuid import UUID

from douanier.domain.entities.customer_discount_usage import (
    CustomerDiscountUsage,
)


class IDiscountUsageRepository(ABC):
    """Interface for redemption record persistence operations."""

    @abstractmethod
    async def create(self, usage: CustomerDiscountUsage) -> CustomerDiscountUsage:
        """
        Record a redemption.

        Args:
            usage: CustomerDiscountUsage entity to create

        Returns:
            Created usage entity
        """

    @abstractmethod
    async def count_for_customer(self, rule_id: UUID, customer_id: UUID) -> int:
        """
        Count redemptions of one rule by one customer.

        Args:
            rule_id: Rule unique identifier
            customer_id: Verified customer unique identifier

        Returns:
            Number of redemptions
        """

    @abstractmethod
    async def counts_by_rule_for_wallet(
        self, shop_id: UUID, wallet_address: str
    ) -> dict[UUID, int]:
        """
        Count redemptions per rule for a wallet within a shop.

        Args:
            shop_id: Shop unique identifier
            wallet_address: Lower-case wallet address

        Returns:
            Mapping of rule ID to redemption count (rules without
            redemptions are absent)
        """

    @abstractmethod
    async def totals_by_shop(self, shop_id: UUID) -> tuple[int, Decimal]:
        """
        Aggregate redemptions of a shop.

        Args:
            shop_id: Shop unique identifier

        Returns:
            Tuple of (number of redemptions, total discount amount)
        """
