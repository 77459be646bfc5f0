"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field


class SendCodeRequest(BaseModel):
    """Request model for code issuance."""

    email: EmailStr


class VerifyCodeRequest(BaseModel):
    """Request model for code validation."""

    email: EmailStr
    code: str = Field(
        ...,
        min_length=4,
        max_length=4,
        description="4-digit verification code",
    )


class ApiResponse(BaseModel):
    """Standard response envelope for registration endpoints."""

    success: bool
    message: str


class VerificationStatusResponse(BaseModel):
    """Response model for verification status lookup."""

    has_pending_verification: bool
    can_request_new_code: bool
