"""
Export Projector

사용자 지출 원장 전체를 텍스트 리포트로 직렬화하여 Object Store에 저장.

리포트 형식:
    created_at | description | category | amount
    2024-03-10 | Lunch | Food | 25.50

- 키: expenses-<email>.txt (매번 전체 덮어쓰기, 버전 관리 없음)
- 원장 상태가 같으면 출력도 바이트 단위로 동일
- 원장(expenses)이 원본이며 내보내기 파일은 언제든 다시 만들 수 있는 사본
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Iterable

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import IObjectStore
from core.constants import ExportFormat
from core.domain.models import Expense, User
from core.storage.expense_store import ExpenseStore

logger = logging.getLogger(__name__)


CENT = Decimal("0.01")


def export_key(email: str) -> str:
    """사용자 이메일로 내보내기 키 생성

    Example:
        >>> export_key("a@x.com")
        'expenses-a@x.com.txt'
    """
    return f"{ExportFormat.KEY_PREFIX}{email}{ExportFormat.KEY_SUFFIX}"


def format_amount(amount: Decimal) -> str:
    """금액을 소수점 2자리 문자열로 변환"""
    return str(amount.quantize(CENT, rounding=ROUND_HALF_UP))


def format_line(expense: Expense) -> str:
    """지출 1건을 리포트 한 줄로 변환 (날짜는 UTC 기준)"""
    return ExportFormat.SEPARATOR.join([
        expense.created_at.date().isoformat(),
        expense.description,
        expense.category,
        format_amount(expense.amount),
    ])


def render_report(expenses: Iterable[Expense]) -> str:
    """지출 목록을 리포트 텍스트로 변환

    Args:
        expenses: 지출 목록 (주어진 순서 그대로 출력)

    Returns:
        헤더 + 지출별 한 줄, 개행으로 연결 (끝 개행 없음)
    """
    lines = [ExportFormat.HEADER]
    lines.extend(format_line(expense) for expense in expenses)
    return "\n".join(lines)


class ExportProjector:
    """Export Projector

    실행마다 별도 DB 연결을 열어 원장을 읽고 Object Store에 기록.
    요청 처리용 연결과 분리되어 요청 종료 후에도 안전하게 실행됨.

    Args:
        db_path: SQLite DB 경로
        object_store: 내보내기 저장소

    사용 예시:
    ```python
    projector = ExportProjector(settings.db_path, S3ObjectStore(...))
    key = await projector.run(user)
    ```
    """

    def __init__(self, db_path: Path | str, object_store: IObjectStore):
        self.db_path = Path(db_path)
        self.object_store = object_store

    async def render_for(self, user: User) -> str:
        """사용자 리포트 생성 (저장 없음)"""
        async with SQLiteAdapter(self.db_path) as db:
            expenses = await ExpenseStore(db).list_for_export(user.user_id)
        return render_report(expenses)

    async def run(self, user: User) -> str:
        """리포트 생성 후 Object Store에 저장

        Args:
            user: 이미 조회된 사용자 (재조회하지 않음)

        Returns:
            저장된 객체 키

        Raises:
            Exception: DB/저장소 오류 (ExportDispatcher가 로그 처리)
        """
        report = await self.render_for(user)
        key = export_key(user.email)

        await self.object_store.put(
            key,
            report.encode("utf-8"),
            ExportFormat.CONTENT_TYPE,
        )

        logger.info(
            f"지출 내보내기 완료: {key}",
            extra={"user_id": user.user_id, "bytes": len(report)},
        )
        return key
