"""
Shop info API route.

- GET /shop - Installed shop named by the merchant token
"""

from fastapi import APIRouter, Depends

from douanier.application.use_cases import GetShopInfo
from douanier.di.dependencies import get_get_shop_info
from douanier.presentation.api.middleware.auth import get_current_shop
from douanier.presentation.schemas.base import ErrorResponse
from douanier.presentation.schemas.discount_schemas import (
    ShopInfoResponse,
    ShopSchema,
)

router = APIRouter(tags=["Shop"])


@router.get(
    "/shop",
    response_model=ShopInfoResponse,
    summary="Get shop info",
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_shop_info(
    shop: str = Depends(get_current_shop),
    use_case: GetShopInfo = Depends(get_get_shop_info),
) -> ShopInfoResponse:
    """Domain and install time of the caller's shop."""
    installed = await use_case.execute(shop)
    return ShopInfoResponse(
        shop=ShopSchema(
            domain=installed.shop_domain,
            installed_at=installed.installed_at,
        )
    )
