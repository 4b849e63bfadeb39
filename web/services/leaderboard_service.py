"""
Leaderboard 서비스

users.total_expense 기준 상위 사용자 조회 (읽기 전용).
"""

from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.storage.user_store import UserStore


class LeaderboardService:
    """Leaderboard 서비스

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.users = UserStore(db)

    async def get_leaderboard(
        self,
        limit: int = Defaults.LEADERBOARD_LIMIT,
    ) -> list[dict[str, Any]]:
        """지출 합계 내림차순 목록

        Returns:
            [{"name": ..., "total_expenses": "..."}]
        """
        rows = await self.users.top_by_total(limit)
        return [
            {"name": name, "total_expenses": str(total)}
            for name, total in rows
        ]
