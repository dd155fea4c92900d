"""
Discount rule repository interface.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from douanier.domain.entities.discount_rule import DiscountRule


class IDiscountRuleRepository(ABC):
    """Interface for discount rule persistence operations."""

    @abstractmethod
    async def create(self, rule: DiscountRule) -> DiscountRule:
        """
        Create new discount rule.

        Args:
            rule: DiscountRule entity to create

        Returns:
            Created rule entity
        """

    @abstractmethod
    async def get_by_id(
        self, rule_id: UUID, shop_id: Optional[UUID] = None
    ) -> Optional[DiscountRule]:
        """
        Get discount rule by ID.

        Args:
            rule_id: Rule unique identifier
            shop_id: Restrict lookup to this shop when given

        Returns:
            DiscountRule entity if found, None otherwise
        """

    @abstractmethod
    async def list_by_shop(self, shop_id: UUID) -> list[DiscountRule]:
        """
        List all rules of a shop, newest first.

        Args:
            shop_id: Shop unique identifier

        Returns:
            List of discount rule entities
        """

    @abstractmethod
    async def list_active_by_shop(self, shop_id: UUID) -> list[DiscountRule]:
        """
        List active rules of a shop in creation order.

        Args:
            shop_id: Shop unique identifier

        Returns:
            List of active discount rule entities
        """

    @abstractmethod
    async def update(self, rule: DiscountRule) -> DiscountRule:
        """
        Update mutable fields of an existing rule.

        The usage counter is never written here.

        Args:
            rule: DiscountRule entity with updated data

        Returns:
            Updated rule entity

        Raises:
            EntityNotFoundError: If rule not found
        """

    @abstractmethod
    async def delete(self, rule_id: UUID, shop_id: UUID) -> bool:
        """
        Delete a rule owned by a shop.

        Args:
            rule_id: Rule unique identifier
            shop_id: Owning shop

        Returns:
            True if deleted, False if not found
        """

    @abstractmethod
    async def reserve_usage(
        self, rule_id: UUID, shop_id: UUID, now: datetime
    ) -> bool:
        """
        Atomically take one usage slot.

        Increments usage_count only if the rule belongs to the shop, is
        active, is inside its validity window and is below its usage limit.

        Args:
            rule_id: Rule unique identifier
            shop_id: Shop the caller is redeeming for
            now: Moment used for the window check

        Returns:
            True if a slot was taken, False otherwise
        """

    @abstractmethod
    async def count_by_shop(self, shop_id: UUID) -> tuple[int, int]:
        """
        Count rules of a shop.

        Args:
            shop_id: Shop unique identifier

        Returns:
            Tuple of (total rules, active rules)
        """
