"""
Token metadata API route.

- GET /tokens/{chain_id}/{address} - ERC-20 name, symbol and decimals
"""

from fastapi import APIRouter, Depends, Path

from douanier.application.use_cases import GetTokenInfo
from douanier.di.dependencies import get_get_token_info
from douanier.presentation.api.middleware.auth import get_current_shop
from douanier.presentation.schemas.base import ErrorResponse
from douanier.presentation.schemas.discount_schemas import TokenInfoResponse

router = APIRouter(prefix="/tokens", tags=["Tokens"])


@router.get(
    "/{chain_id}/{address}",
    response_model=TokenInfoResponse,
    summary="Get token info",
    dependencies=[Depends(get_current_shop)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def get_token_info(
    chain_id: int = Path(..., gt=0, description="EVM chain id"),
    address: str = Path(..., description="Token contract address"),
    use_case: GetTokenInfo = Depends(get_get_token_info),
) -> TokenInfoResponse:
    """
    Look up a token contract before building a rule on it.

    Raises through the error handler:
        UnsupportedChainError: 400 if the chain is not configured
        InvalidAddressError: 400 if the address is malformed
        RemoteUnavailableError: 502 if the RPC call fails
    """
    info = await use_case.execute(chain_id=chain_id, token_contract=address)
    return TokenInfoResponse(
        address=info.address,
        chain_id=info.chain_id,
        name=info.name,
        symbol=info.symbol,
        decimals=info.decimals,
    )
