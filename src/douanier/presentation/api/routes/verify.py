"""
Wallet verification API routes.

Storefront endpoints:
- POST /verify/init - Start a verification session
- POST /verify/signature - Submit the signed challenge
- POST /verify/token-balance - List discounts the wallet qualifies for
"""

from datetime import timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from douanier.application.use_cases import (
    CheckTokenBalance,
    CreateVerificationSession,
    VerifyWalletSignature,
)
from douanier.di.dependencies import (
    get_check_token_balance,
    get_create_verification_session,
    get_verify_wallet_signature,
)
from douanier.infrastructure.monitoring import metrics
from douanier.infrastructure.monitoring.logger import get_logger
from douanier.presentation.api.middleware.error_handler import error_response
from douanier.presentation.schemas.base import ErrorResponse
from douanier.presentation.schemas.verify_schemas import (
    EligibleDiscountSchema,
    InitVerificationRequest,
    InitVerificationResponse,
    TokenBalanceRequest,
    TokenBalanceResponse,
    VerifySignatureRequest,
    VerifySignatureResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/verify", tags=["Verification"])


@router.post(
    "/init",
    response_model=InitVerificationResponse,
    status_code=status.HTTP_200_OK,
    summary="Start wallet verification",
    responses={400: {"model": ErrorResponse}},
)
async def init_verification(
    request: InitVerificationRequest,
    use_case: CreateVerificationSession = Depends(get_create_verification_session),
) -> InitVerificationResponse:
    """
    Issue a challenge for the wallet to sign.

    Args:
        request: Shop, wallet address and optional chain id
        use_case: CreateVerificationSession use case (injected)

    Returns:
        Session token, challenge message and expiry
    """
    result = await use_case.execute(
        shop_domain=request.shop,
        wallet_address=request.wallet_address,
        chain_id=request.chain_id if request.chain_id is not None else 1,
    )
    metrics.sessions_created_total.inc()

    return InitVerificationResponse(
        session_token=result.session_token,
        message=result.message,
        expires_at=result.expires_at.replace(tzinfo=timezone.utc),
    )


@router.post(
    "/signature",
    response_model=VerifySignatureResponse,
    status_code=status.HTTP_200_OK,
    summary="Verify signed challenge",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def verify_signature(
    request: VerifySignatureRequest,
    use_case: VerifyWalletSignature = Depends(get_verify_wallet_signature),
):
    """
    Consume a pending session with the wallet's signature.

    A failed or expired outcome is still persisted, so it is rendered
    here instead of being raised through the error handler.

    Args:
        request: Session token and signature
        use_case: VerifyWalletSignature use case (injected)

    Returns:
        Success flag and verified wallet, or the error body
    """
    result = await use_case.execute(
        session_token=request.session_token,
        signature=request.signature,
    )
    metrics.sessions_consumed_total.labels(outcome=result.status.value).inc()

    failure = result.failure()
    if failure is not None:
        return error_response(failure)

    return VerifySignatureResponse(
        success=True,
        wallet_address=result.wallet_address,
    )


@router.post(
    "/token-balance",
    response_model=TokenBalanceResponse,
    status_code=status.HTTP_200_OK,
    summary="List eligible discounts",
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def token_balance(
    request: TokenBalanceRequest,
    use_case: CheckTokenBalance = Depends(get_check_token_balance),
) -> TokenBalanceResponse:
    """
    Check the wallet's balances against the shop's active rules.

    Rules whose balance lookup fails are left out rather than failing
    the whole request.

    Args:
        request: Shop, wallet address and verified session token
        use_case: CheckTokenBalance use case (injected)

    Returns:
        Eligible discounts in rule creation order
    """
    result = await use_case.execute(
        shop_domain=request.shop,
        wallet_address=request.wallet_address,
        session_token=request.session_token,
    )

    return TokenBalanceResponse(
        eligible_discounts=[
            EligibleDiscountSchema(
                id=item.id,
                name=item.name,
                description=item.description,
                discount_type=item.discount_type,
                discount_value=item.discount_value,
                max_discount_amount=item.max_discount_amount,
                token_balance=item.token_balance,
                required_tokens=item.required_tokens,
            )
            for item in result.eligible_discounts
        ],
        wallet_address=result.wallet_address,
    )
