"""
API v1 routes.

Defines REST endpoints for issuing and validating email verification codes.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import EmailStr

from src.api.dependencies import get_verification_service
from src.api.models import (
    ApiResponse,
    SendCodeRequest,
    VerificationStatusResponse,
    VerifyCodeRequest,
)
from src.domain.verification import VerificationService

router = APIRouter(prefix="/registration", tags=["v1"])


@router.post(
    "/send-code",
    response_model=ApiResponse,
    responses={
        400: {"model": ApiResponse, "description": "Cooldown active"},
        422: {"description": "Validation error"},
    },
    summary="Send a verification code",
    description="Issue a 4-digit verification code for the email and queue it for delivery. "
    "A new code can be requested once per minute.",
)
def send_code(
    request_data: SendCodeRequest,
    response: Response,
    service: VerificationService = Depends(get_verification_service),
) -> ApiResponse:
    """
    Issue and queue a verification code.

    Runs in the threadpool; publish() blocks through its retry waits.
    """
    result = service.request_code(request_data.email)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return ApiResponse(success=result.success, message=result.message)


@router.post(
    "/verify-code",
    response_model=ApiResponse,
    responses={
        400: {"model": ApiResponse, "description": "Code not found, expired, exhausted or invalid"},
        422: {"description": "Validation error"},
    },
    summary="Verify a code",
    description="Submit the 4-digit code received by email. "
    "A code is single use and allows 3 attempts within 10 minutes.",
)
async def verify_code(
    request_data: VerifyCodeRequest,
    response: Response,
    service: VerificationService = Depends(get_verification_service),
) -> ApiResponse:
    """
    Validate a verification code.

    - **email**: Email the code was sent to
    - **code**: 4-character code
    """
    result = service.verify(request_data.email, request_data.code)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return ApiResponse(success=result.success, message=result.message)


@router.get(
    "/status",
    response_model=VerificationStatusResponse,
    summary="Verification status",
)
async def verification_status(
    email: EmailStr = Query(...),
    service: VerificationService = Depends(get_verification_service),
) -> VerificationStatusResponse:
    """Report whether a code is pending and whether a new one may be requested."""
    current = service.status(email)
    return VerificationStatusResponse(
        has_pending_verification=current.has_pending_verification,
        can_request_new_code=current.can_request_new_code,
    )
