"""
ExpenseStore - 지출 원장 저장소

expenses 테이블 추가/삭제/조회.
기존 행의 금액 수정은 지원하지 않음 (추가/삭제만).
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import EXPENSE_COLUMNS, Expense
from core.utils.timezone import from_db_ts, now_utc, to_db_ts

logger = logging.getLogger(__name__)


class ExpenseStore:
    """지출 원장 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def insert(
        self,
        user_id: str,
        amount: Decimal,
        description: str,
        category: str,
        created_at: datetime | None = None,
    ) -> Expense:
        """지출 추가

        Args:
            user_id: 소유자 ID
            amount: 금액 (0 이상)
            description: 설명
            category: 분류
            created_at: 생성 시각 (None이면 서버 현재 시각)

        Returns:
            저장된 Expense
        """
        created_at_str = to_db_ts(created_at or now_utc())
        expense = Expense(
            expense_id=f"exp-{uuid.uuid4().hex}",
            user_id=user_id,
            amount=amount,
            description=description,
            category=category,
            created_at=from_db_ts(created_at_str),
        )

        await self.db.execute(
            """
            INSERT INTO expenses (
                expense_id, user_id, amount, description, category, created_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                expense.expense_id,
                expense.user_id,
                str(expense.amount),
                expense.description,
                expense.category,
                created_at_str,
            ),
        )

        return expense

    async def get(self, expense_id: str) -> Expense | None:
        """ID로 조회"""
        row = await self.db.fetchone(
            f"SELECT {EXPENSE_COLUMNS} FROM expenses WHERE expense_id = ?",
            (expense_id,),
        )
        return Expense.from_row(row) if row else None

    async def delete(self, expense_id: str) -> bool:
        """지출 삭제

        Returns:
            삭제 여부
        """
        cursor = await self.db.execute(
            "DELETE FROM expenses WHERE expense_id = ?",
            (expense_id,),
        )
        return cursor.rowcount > 0

    async def list_by_user(self, user_id: str) -> list[Expense]:
        """사용자 전체 지출 (최신순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {EXPENSE_COLUMNS} FROM expenses
            WHERE user_id = ?
            ORDER BY created_at DESC, seq DESC
            """,
            (user_id,),
        )
        return [Expense.from_row(row) for row in rows]

    async def list_by_user_between(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
    ) -> list[Expense]:
        """기간 내 지출 (양 끝 포함, 최신순)

        Args:
            user_id: 소유자 ID
            start: 시작 시각 (aware)
            end: 종료 시각 (aware)
        """
        rows = await self.db.fetchall(
            f"""
            SELECT {EXPENSE_COLUMNS} FROM expenses
            WHERE user_id = ? AND created_at >= ? AND created_at <= ?
            ORDER BY created_at DESC, seq DESC
            """,
            (user_id, to_db_ts(start), to_db_ts(end)),
        )
        return [Expense.from_row(row) for row in rows]

    async def list_for_export(self, user_id: str) -> list[Expense]:
        """내보내기용 전체 지출 (저장 순서)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {EXPENSE_COLUMNS} FROM expenses
            WHERE user_id = ?
            ORDER BY seq ASC
            """,
            (user_id,),
        )
        return [Expense.from_row(row) for row in rows]

    async def sum_by_user(self, user_id: str) -> Decimal:
        """사용자 지출 합계 (원장 기준 재계산)"""
        rows = await self.db.fetchall(
            "SELECT amount FROM expenses WHERE user_id = ?",
            (user_id,),
        )
        return sum((Decimal(str(row[0])) for row in rows), Decimal("0"))
