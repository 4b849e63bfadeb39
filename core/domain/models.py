"""
도메인 모델

users / expenses / password_resets 테이블 행에 대응하는 데이터클래스.
금액은 반드시 Decimal 타입 사용 (DB에는 문자열로 저장).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.utils.timezone import from_db_ts


# SELECT 컬럼 순서 (from_row와 일치해야 함)
USER_COLUMNS = "user_id, email, name, password_hash, is_premium, total_expense, created_at"
EXPENSE_COLUMNS = "expense_id, user_id, amount, description, category, created_at"
RESET_COLUMNS = "token, user_id, expires_at, created_at"


@dataclass
class User:
    """사용자

    Attributes:
        user_id: 사용자 ID
        email: 이메일 (유일)
        name: 표시 이름
        password_hash: bcrypt 해시
        is_premium: 프리미엄 여부
        total_expense: 지출 합계 (expenses.amount 합과 항상 일치)
        created_at: 가입 시각 (UTC)
    """

    user_id: str
    email: str
    name: str
    password_hash: str
    is_premium: bool = False
    total_expense: Decimal = Decimal("0")
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "User":
        """DB 행에서 생성"""
        return cls(
            user_id=row[0],
            email=row[1],
            name=row[2],
            password_hash=row[3],
            is_premium=bool(row[4]),
            total_expense=Decimal(str(row[5])),
            created_at=from_db_ts(row[6]) if row[6] else None,
        )


@dataclass
class Expense:
    """지출 기록

    생성 후 불변. 삭제만 가능.
    """

    expense_id: str
    user_id: str
    amount: Decimal
    description: str
    category: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "Expense":
        """DB 행에서 생성"""
        return cls(
            expense_id=row[0],
            user_id=row[1],
            amount=Decimal(str(row[2])),
            description=row[3],
            category=row[4],
            created_at=from_db_ts(row[5]),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "id": self.expense_id,
            "amount": str(self.amount),
            "description": self.description,
            "category": self.category,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class PasswordResetToken:
    """비밀번호 재설정 토큰

    now < expires_at 이고 아직 삭제(소비)되지 않았을 때만 유효.
    """

    token: str
    user_id: str
    expires_at: datetime
    created_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "PasswordResetToken":
        """DB 행에서 생성"""
        return cls(
            token=row[0],
            user_id=row[1],
            expires_at=from_db_ts(row[2]),
            created_at=from_db_ts(row[3]),
        )

    def is_valid(self, now: datetime) -> bool:
        """만료 여부 확인"""
        return now < self.expires_at
