"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
검증 실패는 DB 접근 전에 400으로 응답 (web.app 예외 핸들러).
"""

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, Field

from core.constants import Defaults


class SignupRequest(BaseModel):
    """회원가입 요청

    누락 필드는 서비스에서 "All fields are required"로 처리.
    """

    name: str = Field(default="", description="표시 이름")
    email: str = Field(default="", description="이메일")
    password: str = Field(default="", description="비밀번호")


class LoginRequest(BaseModel):
    """로그인 요청"""

    email: str = Field(default="", description="이메일")
    password: str = Field(default="", description="비밀번호")


class ForgotPasswordRequest(BaseModel):
    """비밀번호 찾기 요청"""

    email: str = Field(default="", description="이메일")


class ResetPasswordRequest(BaseModel):
    """비밀번호 재설정 요청"""

    token: str = Field(default="", description="재설정 토큰")
    password: str = Field(default="", description="새 비밀번호")


class ExpenseCreateRequest(BaseModel):
    """지출 추가 요청"""

    amount: Decimal = Field(
        ...,
        ge=0,
        le=Defaults.MAX_EXPENSE_AMOUNT,
        allow_inf_nan=False,
        description="금액 (0 이상, 상한 Defaults.MAX_EXPENSE_AMOUNT)",
    )
    description: str = Field(..., min_length=1, description="설명")
    category: str = Field(..., min_length=1, description="분류")
    email: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("email", "ownerEmail"),
        description="소유자 이메일",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "amount": "25.50",
                    "description": "Lunch",
                    "category": "Food",
                    "email": "a@x.com",
                },
            ]
        }
    }


class PremiumUpdateRequest(BaseModel):
    """프리미엄 전환 요청"""

    email: str = Field(default="", description="이메일")
