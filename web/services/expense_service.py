"""
Expense 서비스

지출 추가/삭제(원장 + 사용자 합계 동시 갱신)와 조회.

변경 규칙:
1. 원장 행 추가/삭제와 users.total_expense 증감은 하나의 트랜잭션
   (BEGIN IMMEDIATE)에서 함께 커밋되거나 함께 롤백됨
2. 커밋 이후에만 내보내기를 예약하며, 응답은 내보내기를 기다리지 않음
3. 내보내기 실패는 지출 변경 결과에 영향 없음
"""

import logging
from datetime import datetime
from decimal import Decimal

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import Expense, User
from core.constants import Defaults
from core.domain.windows import window_range
from core.errors import AtomicStepFailure, NotFoundError, ValidationError
from core.export.dispatcher import ExportDispatcher
from core.storage.expense_store import ExpenseStore
from core.storage.user_store import UserStore
from core.types import TimeWindow

logger = logging.getLogger(__name__)


class ExpenseService:
    """Expense 서비스

    Args:
        db: SQLiteAdapter 인스턴스 (요청 단위 연결)
        dispatcher: 내보내기 디스패처 (None이면 내보내기 비활성화)
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        dispatcher: ExportDispatcher | None = None,
    ):
        self.db = db
        self.dispatcher = dispatcher
        self.users = UserStore(db)
        self.expenses = ExpenseStore(db)

    # =========================================================================
    # 변경
    # =========================================================================

    async def add_expense(
        self,
        email: str,
        amount: Decimal,
        description: str,
        category: str,
    ) -> Expense:
        """지출 추가

        Args:
            email: 소유자 이메일
            amount: 금액 (0 이상)
            description: 설명
            category: 분류

        Returns:
            저장된 Expense

        Raises:
            ValidationError: 금액이 음수/비정상이거나 상한 초과인 경우 (DB 접근 전)
            NotFoundError: 사용자가 없는 경우 (변경 없음)
            AtomicStepFailure: 트랜잭션 실패 (전체 롤백됨)
        """
        if not amount.is_finite() or amount < 0:
            raise ValidationError("amount must be a non-negative number")
        if amount > Defaults.MAX_EXPENSE_AMOUNT:
            raise ValidationError(
                f"amount must not exceed {Defaults.MAX_EXPENSE_AMOUNT}"
            )

        user: User | None = None
        try:
            async with self.db.transaction(immediate=True):
                user = await self.users.find_by_email(email)
                if user is None:
                    raise NotFoundError("User not found")

                expense = await self.expenses.insert(
                    user_id=user.user_id,
                    amount=amount,
                    description=description,
                    category=category,
                )
                user.total_expense = await self.users.adjust_total(
                    user.user_id, amount
                )
        except NotFoundError:
            raise
        except Exception as e:
            logger.error(
                f"Failed to add expense: {e}",
                extra={"email": email, "amount": str(amount)},
            )
            raise AtomicStepFailure("Error adding expense") from e

        logger.info(
            f"Expense added: {expense.expense_id}",
            extra={"user_id": user.user_id, "amount": str(amount)},
        )

        self._schedule_export(user)
        return expense

    async def delete_expense(self, expense_id: str) -> Expense:
        """지출 삭제

        Args:
            expense_id: 지출 ID

        Returns:
            삭제된 Expense

        Raises:
            NotFoundError: 지출이 없는 경우 (변경 없음)
            AtomicStepFailure: 트랜잭션 실패 (전체 롤백됨)
        """
        try:
            async with self.db.transaction(immediate=True):
                expense = await self.expenses.get(expense_id)
                if expense is None:
                    raise NotFoundError("Expense not found")

                await self.users.adjust_total(expense.user_id, -expense.amount)
                await self.expenses.delete(expense_id)
        except NotFoundError:
            raise
        except Exception as e:
            logger.error(
                f"Failed to delete expense: {e}",
                extra={"expense_id": expense_id},
            )
            raise AtomicStepFailure("Error deleting expense") from e

        logger.info(
            f"Expense deleted: {expense_id}",
            extra={"user_id": expense.user_id, "amount": str(expense.amount)},
        )

        # 커밋 이후 소유자 재조회 후 내보내기
        if self.dispatcher is not None:
            try:
                owner = await self.users.get(expense.user_id)
            except Exception as e:
                logger.error(f"Owner lookup for export failed: {e}")
                owner = None
            if owner is not None:
                self._schedule_export(owner)

        return expense

    def _schedule_export(self, user: User) -> None:
        if self.dispatcher is None:
            return
        self.dispatcher.dispatch(user)

    # =========================================================================
    # 조회
    # =========================================================================

    async def _require_user(self, email: str) -> User:
        user = await self.users.find_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_expenses(self, email: str) -> list[Expense]:
        """사용자 전체 지출 (최신순)

        Raises:
            NotFoundError: 사용자가 없는 경우
        """
        user = await self._require_user(email)
        return await self.expenses.list_by_user(user.user_id)

    async def list_expenses_between(
        self,
        email: str,
        start: datetime,
        end: datetime,
    ) -> list[Expense]:
        """기간 내 지출 (양 끝 포함, 최신순)"""
        user = await self._require_user(email)
        return await self.expenses.list_by_user_between(user.user_id, start, end)

    async def list_expenses_in_window(
        self,
        email: str,
        window: TimeWindow | str,
        now: datetime | None = None,
    ) -> list[Expense]:
        """일/주/월/연 단위 지출 조회

        Args:
            email: 소유자 이메일
            window: 기간 단위
            now: 기준 시각 (None이면 서버 현재 시각)
        """
        start, end = window_range(window, now)
        return await self.list_expenses_between(email, start, end)
