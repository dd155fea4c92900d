"""
Discount redemption API route.

- POST /apply-discount - Mint a redemption code for an eligible wallet
"""

from fastapi import APIRouter, Depends, status

from douanier.application.use_cases import ApplyDiscount
from douanier.di.dependencies import get_apply_discount
from douanier.domain.exceptions import DouanierException
from douanier.infrastructure.monitoring import metrics
from douanier.infrastructure.monitoring.logger import get_logger
from douanier.presentation.schemas.base import ErrorResponse
from douanier.presentation.schemas.verify_schemas import (
    ApplyDiscountRequest,
    ApplyDiscountResponse,
    DiscountRuleSummary,
)

logger = get_logger(__name__)

router = APIRouter(tags=["Discounts"])


@router.post(
    "/apply-discount",
    response_model=ApplyDiscountResponse,
    status_code=status.HTTP_200_OK,
    summary="Redeem a discount",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def apply_discount(
    request: ApplyDiscountRequest,
    use_case: ApplyDiscount = Depends(get_apply_discount),
) -> ApplyDiscountResponse:
    """
    Reserve a usage slot and return the redemption code.

    Args:
        request: Shop, rule, wallet, session token and optional cart total
        use_case: ApplyDiscount use case (injected)

    Returns:
        Redemption code and rule summary
    """
    try:
        result = await use_case.execute(
            shop_domain=request.shop,
            discount_rule_id=request.discount_rule_id,
            wallet_address=request.wallet_address,
            session_token=request.session_token,
            cart_total=request.cart_total,
        )
    except DouanierException as e:
        metrics.discounts_issued_total.labels(outcome=e.code.lower()).inc()
        raise

    metrics.discounts_issued_total.labels(outcome="issued").inc()
    logger.info(
        f"Discount issued for rule {result.discount_rule.id}",
        extra={"shop": request.shop, "discount_rule_id": str(result.discount_rule.id)},
    )

    rule = result.discount_rule
    return ApplyDiscountResponse(
        discount_code=result.discount_code,
        discount_rule=DiscountRuleSummary(
            id=rule.id,
            name=rule.name,
            discount_type=rule.discount_type.value,
            discount_value=rule.discount_value,
            max_discount_amount=rule.max_discount_amount,
        ),
    )
