"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    ExpenseCreateRequest,
    ForgotPasswordRequest,
    LoginRequest,
    PremiumUpdateRequest,
    ResetPasswordRequest,
    SignupRequest,
)
from web.models.responses import (
    ExpenseCreatedResponse,
    ExpenseResponse,
    HealthResponse,
    LeaderboardEntry,
    LoginResponse,
    MessageResponse,
    PremiumOrderResponse,
    PremiumStatusResponse,
)

__all__ = [
    # Requests
    "ExpenseCreateRequest",
    "ForgotPasswordRequest",
    "LoginRequest",
    "PremiumUpdateRequest",
    "ResetPasswordRequest",
    "SignupRequest",
    # Responses
    "ExpenseCreatedResponse",
    "ExpenseResponse",
    "HealthResponse",
    "LeaderboardEntry",
    "LoginResponse",
    "MessageResponse",
    "PremiumOrderResponse",
    "PremiumStatusResponse",
]
