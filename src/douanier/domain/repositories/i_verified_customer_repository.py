"""
Verified customer repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from douanier.domain.entities.verified_customer import VerifiedCustomer


class IVerifiedCustomerRepository(ABC):
    """Interface for verified customer persistence operations."""

    @abstractmethod
    async def upsert(
        self, shop_id: UUID, wallet_address: str, chain_id: int
    ) -> VerifiedCustomer:
        """
        Create or refresh the customer record for (shop, wallet).

        Args:
            shop_id: Shop unique identifier
            wallet_address: Lower-case wallet address
            chain_id: Chain the wallet was last verified on

        Returns:
            Stored customer entity
        """

    @abstractmethod
    async def get_by_wallet(
        self, shop_id: UUID, wallet_address: str
    ) -> Optional[VerifiedCustomer]:
        """
        Get customer by shop and wallet.

        Args:
            shop_id: Shop unique identifier
            wallet_address: Wallet address

        Returns:
            VerifiedCustomer if found, None otherwise
        """

    @abstractmethod
    async def count_by_shop(self, shop_id: UUID) -> int:
        """
        Count verified customers of a shop.

        Args:
            shop_id: Shop unique identifier

        Returns:
            Number of verified customers
        """
