"""
Dependency Injection Container for Douanier.

Manages all service instances and their dependencies.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from douanier.application.services.eligibility_evaluator import (
    EligibilityEvaluator,
)
from douanier.config.settings import get_settings
from douanier.domain.repositories.i_discount_rule_repository import (
    IDiscountRuleRepository,
)
from douanier.domain.repositories.i_discount_usage_repository import (
    IDiscountUsageRepository,
)
from douanier.domain.repositories.i_shop_repository import IShopRepository
from douanier.domain.repositories.i_verification_session_repository import (
    IVerificationSessionRepository,
)
from douanier.domain.repositories.i_verified_customer_repository import (
    IVerifiedCustomerRepository,
)
from douanier.domain.services.i_balance_oracle import IBalanceOracle
from douanier.domain.services.i_signature_verifier import ISignatureVerifier
from douanier.infrastructure.auth.evm_signature_verifier import (
    EVMSignatureVerifier,
)
from douanier.infrastructure.blockchain.chain_balance_oracle import (
    ChainBalanceOracle,
)
from douanier.infrastructure.persistence.database import Database
from douanier.infrastructure.persistence.repositories.discount_rule_repository import (  # noqa: E501
    DiscountRuleRepository,
)
from douanier.infrastructure.persistence.repositories.discount_usage_repository import (  # noqa: E501
    DiscountUsageRepository,
)
from douanier.infrastructure.persistence.repositories.shop_repository import (
    ShopRepository,
)
from douanier.infrastructure.persistence.repositories.verification_session_repository import (  # noqa: E501
    VerificationSessionRepository,
)
from douanier.infrastructure.persistence.repositories.verified_customer_repository import (  # noqa: E501
    VerifiedCustomerRepository,
)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of all services and repositories.
    Uses factory pattern for session-scoped dependencies.
    """

    def __init__(self):
        """Initialize container with None instances."""
        # Infrastructure
        self._database: Optional[Database] = None

        # Domain Services
        self._balance_oracle: Optional[IBalanceOracle] = None
        self._signature_verifier: Optional[ISignatureVerifier] = None

    async def initialize(self) -> None:
        """Initialize all services and establish connections."""
        await self.database.connect()

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._database:
            await self._database.disconnect()

        if self._balance_oracle:
            await self._balance_oracle.close()

    # Infrastructure Getters

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=get_settings().DATABASE_URL,
                echo=get_settings().DATABASE_ECHO,
            )
        return self._database

    # Domain Service Getters

    @property
    def balance_oracle(self) -> IBalanceOracle:
        """Get chain balance oracle built from configured RPC endpoints."""
        if self._balance_oracle is None:
            settings = get_settings()
            self._balance_oracle = ChainBalanceOracle.from_endpoints(
                settings.chain_endpoints(),
                total_timeout=settings.RPC_TOTAL_TIMEOUT,
                connect_timeout=settings.RPC_CONNECT_TIMEOUT,
            )
        return self._balance_oracle

    @property
    def signature_verifier(self) -> ISignatureVerifier:
        """Get wallet signature verifier instance."""
        if self._signature_verifier is None:
            self._signature_verifier = EVMSignatureVerifier()
        return self._signature_verifier

    def get_eligibility_evaluator(
        self, balance_oracle: Optional[IBalanceOracle] = None
    ) -> EligibilityEvaluator:
        """
        Get eligibility evaluator.

        Args:
            balance_oracle: Oracle to use instead of the configured one

        Returns:
            EligibilityEvaluator instance
        """
        return EligibilityEvaluator(
            balance_oracle=balance_oracle or self.balance_oracle,
            call_timeout=get_settings().ORACLE_CALL_TIMEOUT,
        )

    # Repository Getters (Session-scoped)

    def get_shop_repository(self, session: AsyncSession) -> IShopRepository:
        """Get shop repository bound to a session."""
        return ShopRepository(session)

    def get_session_repository(
        self, session: AsyncSession
    ) -> IVerificationSessionRepository:
        """Get verification session repository bound to a session."""
        return VerificationSessionRepository(session)

    def get_rule_repository(self, session: AsyncSession) -> IDiscountRuleRepository:
        """Get discount rule repository bound to a session."""
        return DiscountRuleRepository(session)

    def get_customer_repository(
        self, session: AsyncSession
    ) -> IVerifiedCustomerRepository:
        """Get verified customer repository bound to a session."""
        return VerifiedCustomerRepository(session)

    def get_usage_repository(self, session: AsyncSession) -> IDiscountUsageRepository:
        """Get redemption record repository bound to a session."""
        return DiscountUsageRepository(session)


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()


def reset_container() -> None:
    """Drop the global container (for testing)."""
    global _container
    _container = None
