"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
금액은 Decimal 정밀도 유지를 위해 문자열로 반환.
"""

from pydantic import BaseModel, Field

from core.domain.models import Expense


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    mode: str = Field(..., description="실행 모드 (development/production)")
    version: str = Field(..., description="API 버전")


class MessageResponse(BaseModel):
    """단순 메시지 응답"""

    success: bool = Field(default=True, description="성공 여부")
    message: str = Field(..., description="메시지")


class LoginResponse(BaseModel):
    """로그인 응답"""

    success: bool = True
    message: str = "Login successful"
    email: str
    isPremium: bool


class ExpenseResponse(BaseModel):
    """지출 응답"""

    id: str = Field(..., description="지출 ID")
    amount: str = Field(..., description="금액")
    description: str = Field(..., description="설명")
    category: str = Field(..., description="분류")
    created_at: str = Field(..., description="생성 시각 (UTC ISO)")

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseResponse":
        """Expense에서 생성"""
        return cls(**expense.to_dict())


class ExpenseCreatedResponse(BaseModel):
    """지출 추가 응답"""

    message: str = "Expense added successfully"
    expense: ExpenseResponse


class LeaderboardEntry(BaseModel):
    """리더보드 항목"""

    name: str
    total_expenses: str


class PremiumOrderResponse(BaseModel):
    """결제 주문 응답"""

    orderId: str
    amount: int
    currency: str
    keyId: str


class PremiumStatusResponse(BaseModel):
    """프리미엄 상태 응답"""

    isPremium: bool
