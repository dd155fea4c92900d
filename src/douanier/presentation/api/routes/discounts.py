"""
Merchant discount management API routes.

All endpoints are scoped to the shop named by the merchant token:
- GET /discounts - List rules
- POST /discounts - Create rule
- PATCH /discounts/{rule_id} - Update rule
- DELETE /discounts/{rule_id} - Delete rule
- GET /discounts/stats - Program statistics
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from douanier.application.dto.discount_rule_dto import (
    CreateDiscountRuleCommand,
    DiscountRulePatch,
)
from douanier.application.use_cases import (
    CreateDiscountRule,
    DeleteDiscountRule,
    GetDiscountStats,
    ListDiscountRules,
    UpdateDiscountRule,
)
from douanier.di.dependencies import (
    get_create_discount_rule,
    get_delete_discount_rule,
    get_get_discount_stats,
    get_list_discount_rules,
    get_update_discount_rule,
)
from douanier.infrastructure.monitoring.logger import get_logger
from douanier.presentation.api.middleware.auth import get_current_shop
from douanier.presentation.schemas.base import ErrorResponse
from douanier.presentation.schemas.discount_schemas import (
    CreateDiscountRuleRequest,
    DiscountRuleEnvelope,
    DiscountRuleListResponse,
    DiscountRuleResponse,
    DiscountStatsResponse,
    UpdateDiscountRuleRequest,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/discounts",
    tags=["Discount Management"],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get(
    "",
    response_model=DiscountRuleListResponse,
    summary="List discount rules",
)
async def list_discount_rules(
    shop: str = Depends(get_current_shop),
    use_case: ListDiscountRules = Depends(get_list_discount_rules),
) -> DiscountRuleListResponse:
    """List the shop's rules, newest first."""
    rules = await use_case.execute(shop)
    return DiscountRuleListResponse(
        discount_rules=[DiscountRuleResponse.from_entity(rule) for rule in rules]
    )


@router.post(
    "",
    response_model=DiscountRuleEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create discount rule",
    responses={400: {"model": ErrorResponse}},
)
async def create_discount_rule(
    request: CreateDiscountRuleRequest,
    shop: str = Depends(get_current_shop),
    use_case: CreateDiscountRule = Depends(get_create_discount_rule),
) -> DiscountRuleEnvelope:
    """
    Create a token-gated discount rule.

    Args:
        request: Rule fields
        shop: Merchant's shop (from token)
        use_case: CreateDiscountRule use case (injected)

    Returns:
        Created rule
    """
    rule = await use_case.execute(
        shop,
        CreateDiscountRuleCommand(
            name=request.name,
            description=request.description,
            min_token_amount=request.min_token_amount,
            token_contract_address=request.token_contract_address,
            chain_id=request.chain_id,
            discount_type=request.discount_type,
            discount_value=request.discount_value,
            max_discount_amount=request.max_discount_amount,
            usage_limit=request.usage_limit,
            per_customer_limit=request.per_customer_limit,
            starts_at=request.starts_at,
            ends_at=request.ends_at,
            is_active=request.is_active,
        ),
    )
    logger.info(
        f"Discount rule created: {rule.name}",
        extra={"shop": shop, "discount_rule_id": str(rule.id)},
    )
    return DiscountRuleEnvelope(discount_rule=DiscountRuleResponse.from_entity(rule))


@router.get(
    "/stats",
    response_model=DiscountStatsResponse,
    summary="Discount statistics",
)
async def get_discount_stats(
    shop: str = Depends(get_current_shop),
    use_case: GetDiscountStats = Depends(get_get_discount_stats),
) -> DiscountStatsResponse:
    """Rules, verified customers and redemptions of the shop."""
    stats = await use_case.execute(shop)
    return DiscountStatsResponse(
        total_rules=stats.total_rules,
        active_rules=stats.active_rules,
        total_verified_customers=stats.total_verified_customers,
        total_discounts_used=stats.total_discounts_used,
        total_discount_amount=stats.total_discount_amount,
    )


@router.patch(
    "/{rule_id}",
    response_model=DiscountRuleEnvelope,
    summary="Update discount rule",
    responses={400: {"model": ErrorResponse}},
)
async def update_discount_rule(
    rule_id: UUID,
    request: UpdateDiscountRuleRequest,
    shop: str = Depends(get_current_shop),
    use_case: UpdateDiscountRule = Depends(get_update_discount_rule),
) -> DiscountRuleEnvelope:
    """
    Change the mutable fields of a rule.

    Only fields present in the body are touched; an explicit null
    clears an optional field.
    """
    patch = DiscountRulePatch.from_mapping(request.model_dump(exclude_unset=True))
    rule = await use_case.execute(shop, rule_id, patch)
    logger.info(
        f"Discount rule updated: {rule.name}",
        extra={"shop": shop, "discount_rule_id": str(rule.id)},
    )
    return DiscountRuleEnvelope(discount_rule=DiscountRuleResponse.from_entity(rule))


@router.delete(
    "/{rule_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete discount rule",
)
async def delete_discount_rule(
    rule_id: UUID,
    shop: str = Depends(get_current_shop),
    use_case: DeleteDiscountRule = Depends(get_delete_discount_rule),
) -> Response:
    """Delete a rule together with its redemption records."""
    await use_case.execute(shop, rule_id)
    logger.info(
        "Discount rule deleted",
        extra={"shop": shop, "discount_rule_id": str(rule_id)},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
