"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from douanier.config.settings import get_settings
from douanier.domain.exceptions import DouanierException
from douanier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

status_code_map = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SESSION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "UNVERIFIED_SESSION": status.HTTP_401_UNAUTHORIZED,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "CONFLICT": status.HTTP_400_BAD_REQUEST,
    "SESSION_ALREADY_PROCESSED": status.HTTP_400_BAD_REQUEST,
    "SESSION_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "INVALID_SIGNATURE": status.HTTP_400_BAD_REQUEST,
    "USAGE_LIMIT_REACHED": status.HTTP_400_BAD_REQUEST,
    "CUSTOMER_LIMIT_REACHED": status.HTTP_400_BAD_REQUEST,
    "DISCOUNT_NOT_STARTED": status.HTTP_400_BAD_REQUEST,
    "DISCOUNT_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "UNSUPPORTED_CHAIN": status.HTTP_400_BAD_REQUEST,
    "INVALID_ADDRESS": status.HTTP_400_BAD_REQUEST,
    "REMOTE_UNAVAILABLE": status.HTTP_502_BAD_GATEWAY,
}


def error_response(exc: DouanierException) -> JSONResponse:
    """
    Convert a domain exception to its HTTP response.

    Args:
        exc: Domain exception

    Returns:
        JSONResponse with {"error": code, "message": text}
    """
    status_code = status_code_map.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED and exc.code != "UNVERIFIED_SESSION":
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
        },
        headers=headers,
    )


async def douanier_exception_handler(
    request: Request, exc: DouanierException
) -> JSONResponse:
    """
    Handle Douanier domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    response = error_response(exc)
    if response.status_code >= 500:
        logger.error(
            f"Unmapped domain error {exc.code}: {exc.message}",
            extra={"path": request.url.path},
        )
    elif response.status_code == status.HTTP_502_BAD_GATEWAY:
        logger.warning(f"Upstream failure on {request.url.path}: {exc.message}")
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 VALIDATION_ERROR."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(
            str(part) for part in first.get("loc", ()) if part != "body"
        )
        message = f"Validation failed for {location or 'body'}: {first.get('msg')}"
    else:
        message = "Invalid request"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "VALIDATION_ERROR", "message": message},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; hides details in production."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )

    message = "Internal server error"
    if get_settings().ENV != "production":
        message = f"{type(exc).__name__}: {exc}"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "INTERNAL_ERROR", "message": message},
    )
