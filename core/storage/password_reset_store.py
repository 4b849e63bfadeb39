"""
PasswordResetStore - 비밀번호 재설정 토큰 저장소

토큰은 재설정 성공 시 삭제(소비)되며, 만료된 토큰은 조회되지 않음.
"""

import logging
from datetime import datetime

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import RESET_COLUMNS, PasswordResetToken
from core.utils.timezone import now_utc, to_db_ts

logger = logging.getLogger(__name__)


class PasswordResetStore:
    """비밀번호 재설정 토큰 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def create(
        self,
        user_id: str,
        token: str,
        expires_at: datetime,
    ) -> PasswordResetToken:
        """토큰 저장"""
        reset = PasswordResetToken(
            token=token,
            user_id=user_id,
            expires_at=expires_at,
            created_at=now_utc(),
        )

        await self.db.execute(
            """
            INSERT INTO password_resets (token, user_id, expires_at, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (
                reset.token,
                reset.user_id,
                to_db_ts(reset.expires_at),
                to_db_ts(reset.created_at),
            ),
        )
        await self.db.commit()

        return reset

    async def find_valid(
        self,
        token: str,
        now: datetime | None = None,
    ) -> PasswordResetToken | None:
        """유효한(미만료) 토큰 조회"""
        row = await self.db.fetchone(
            f"""
            SELECT {RESET_COLUMNS} FROM password_resets
            WHERE token = ? AND expires_at > ?
            """,
            (token, to_db_ts(now or now_utc())),
        )
        return PasswordResetToken.from_row(row) if row else None

    async def delete(self, token: str) -> bool:
        """토큰 삭제 (소비)"""
        cursor = await self.db.execute(
            "DELETE FROM password_resets WHERE token = ?",
            (token,),
        )
        return cursor.rowcount > 0

    async def purge_expired(self, now: datetime | None = None) -> int:
        """만료 토큰 정리

        Returns:
            삭제된 토큰 수
        """
        cursor = await self.db.execute(
            "DELETE FROM password_resets WHERE expires_at <= ?",
            (to_db_ts(now or now_utc()),),
        )
        await self.db.commit()

        if cursor.rowcount:
            logger.info(f"만료 토큰 정리: {cursor.rowcount}건")
        return cursor.rowcount
