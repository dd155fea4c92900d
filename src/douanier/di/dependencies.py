"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
All dependencies are async-compatible and use proper scoping.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from douanier.application.use_cases import (
    ApplyDiscount,
    CheckTokenBalance,
    CreateDiscountRule,
    CreateVerificationSession,
    DeleteDiscountRule,
    GetDiscountStats,
    GetShopInfo,
    GetTokenInfo,
    ListDiscountRules,
    UpdateDiscountRule,
    VerifyWalletSignature,
)
from douanier.config.settings import get_settings
from douanier.di.container import get_container
from douanier.domain.services.i_balance_oracle import IBalanceOracle
from douanier.domain.services.i_signature_verifier import ISignatureVerifier

# ================================================================
# Database Dependencies
# ================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    Yields async database session from container.
    Commits when the request succeeds, rolls back otherwise.
    """
    container = get_container()
    async with container.database.session() as session:
        yield session


# ================================================================
# Service Dependencies
# ================================================================


def get_balance_oracle() -> IBalanceOracle:
    """Get ChainBalanceOracle service dependency."""
    return get_container().balance_oracle


def get_signature_verifier() -> ISignatureVerifier:
    """Get SignatureVerifier service dependency."""
    return get_container().signature_verifier


# ================================================================
# Storefront Use Case Dependencies
# ================================================================


def get_create_verification_session(
    session: AsyncSession = Depends(get_db_session),
    verifier: ISignatureVerifier = Depends(get_signature_verifier),
) -> CreateVerificationSession:
    """Get CreateVerificationSession use case dependency."""
    container = get_container()
    return CreateVerificationSession(
        session_repository=container.get_session_repository(session),
        signature_verifier=verifier,
        ttl_minutes=get_settings().SESSION_TTL_MINUTES,
    )


def get_verify_wallet_signature(
    session: AsyncSession = Depends(get_db_session),
    verifier: ISignatureVerifier = Depends(get_signature_verifier),
) -> VerifyWalletSignature:
    """Get VerifyWalletSignature use case dependency."""
    container = get_container()
    return VerifyWalletSignature(
        session_repository=container.get_session_repository(session),
        signature_verifier=verifier,
    )


def get_check_token_balance(
    session: AsyncSession = Depends(get_db_session),
    oracle: IBalanceOracle = Depends(get_balance_oracle),
) -> CheckTokenBalance:
    """Get CheckTokenBalance use case dependency."""
    container = get_container()
    return CheckTokenBalance(
        session_repository=container.get_session_repository(session),
        shop_repository=container.get_shop_repository(session),
        rule_repository=container.get_rule_repository(session),
        customer_repository=container.get_customer_repository(session),
        usage_repository=container.get_usage_repository(session),
        evaluator=container.get_eligibility_evaluator(oracle),
    )


def get_apply_discount(
    session: AsyncSession = Depends(get_db_session),
) -> ApplyDiscount:
    """Get ApplyDiscount use case dependency."""
    container = get_container()
    return ApplyDiscount(
        session_repository=container.get_session_repository(session),
        shop_repository=container.get_shop_repository(session),
        rule_repository=container.get_rule_repository(session),
        customer_repository=container.get_customer_repository(session),
        usage_repository=container.get_usage_repository(session),
        atomic=session.begin_nested,
        code_prefix=get_settings().DISCOUNT_CODE_PREFIX,
    )


# ================================================================
# Merchant Use Case Dependencies
# ================================================================


def get_list_discount_rules(
    session: AsyncSession = Depends(get_db_session),
) -> ListDiscountRules:
    """Get ListDiscountRules use case dependency."""
    container = get_container()
    return ListDiscountRules(
        shop_repository=container.get_shop_repository(session),
        rule_repository=container.get_rule_repository(session),
    )


def get_create_discount_rule(
    session: AsyncSession = Depends(get_db_session),
) -> CreateDiscountRule:
    """Get CreateDiscountRule use case dependency."""
    container = get_container()
    return CreateDiscountRule(
        shop_repository=container.get_shop_repository(session),
        rule_repository=container.get_rule_repository(session),
    )


def get_update_discount_rule(
    session: AsyncSession = Depends(get_db_session),
) -> UpdateDiscountRule:
    """Get UpdateDiscountRule use case dependency."""
    container = get_container()
    return UpdateDiscountRule(
        shop_repository=container.get_shop_repository(session),
        rule_repository=container.get_rule_repository(session),
    )


def get_delete_discount_rule(
    session: AsyncSession = Depends(get_db_session),
) -> DeleteDiscountRule:
    """Get DeleteDiscountRule use case dependency."""
    container = get_container()
    return DeleteDiscountRule(
        shop_repository=container.get_shop_repository(session),
        rule_repository=container.get_rule_repository(session),
    )


def get_get_discount_stats(
    session: AsyncSession = Depends(get_db_session),
) -> GetDiscountStats:
    """Get GetDiscountStats use case dependency."""
    container = get_container()
    return GetDiscountStats(
        shop_repository=container.get_shop_repository(session),
        rule_repository=container.get_rule_repository(session),
        customer_repository=container.get_customer_repository(session),
        usage_repository=container.get_usage_repository(session),
    )


def get_get_token_info(
    oracle: IBalanceOracle = Depends(get_balance_oracle),
) -> GetTokenInfo:
    """Get GetTokenInfo use case dependency."""
    return GetTokenInfo(balance_oracle=oracle)


def get_get_shop_info(
    session: AsyncSession = Depends(get_db_session),
) -> GetShopInfo:
    """Get GetShopInfo use case dependency."""
    container = get_container()
    return GetShopInfo(shop_repository=container.get_shop_repository(session))
