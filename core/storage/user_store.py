"""
UserStore - 사용자 저장소

users 테이블 CRUD 및 지출 합계(total_expense) 관리.

total_expense 규칙:
- 지출 추가/삭제 트랜잭션 내에서 adjust_total()로만 변경
- 값은 Decimal 문자열로 저장 (부동소수 누적 오차 방지)
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import USER_COLUMNS, User
from core.utils.timezone import now_utc, to_db_ts

logger = logging.getLogger(__name__)


class UserStore:
    """사용자 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def create(
        self,
        email: str,
        name: str,
        password_hash: str,
        created_at: datetime | None = None,
    ) -> User:
        """사용자 생성

        Args:
            email: 이메일 (중복 시 sqlite3.IntegrityError)
            name: 표시 이름
            password_hash: 비밀번호 해시
            created_at: 생성 시각 (None이면 현재 UTC)

        Returns:
            생성된 User (total_expense=0, is_premium=False)
        """
        user = User(
            user_id=f"usr-{uuid.uuid4().hex}",
            email=email,
            name=name,
            password_hash=password_hash,
            is_premium=False,
            total_expense=Decimal("0"),
            created_at=created_at or now_utc(),
        )

        await self.db.execute(
            """
            INSERT INTO users (
                user_id, email, name, password_hash,
                is_premium, total_expense, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                user.user_id,
                user.email,
                user.name,
                user.password_hash,
                0,
                str(user.total_expense),
                to_db_ts(user.created_at),
            ),
        )

        logger.debug(f"User created: {user.user_id}")
        return user

    async def get(self, user_id: str) -> User | None:
        """ID로 조회"""
        row = await self.db.fetchone(
            f"SELECT {USER_COLUMNS} FROM users WHERE user_id = ?",
            (user_id,),
        )
        return User.from_row(row) if row else None

    async def find_by_email(self, email: str) -> User | None:
        """이메일로 조회"""
        row = await self.db.fetchone(
            f"SELECT {USER_COLUMNS} FROM users WHERE email = ?",
            (email,),
        )
        return User.from_row(row) if row else None

    async def adjust_total(self, user_id: str, delta: Decimal) -> Decimal:
        """지출 합계 증감

        반드시 지출 추가/삭제와 같은 트랜잭션(immediate) 안에서 호출.

        Args:
            user_id: 사용자 ID
            delta: 증감액 (추가: +amount, 삭제: -amount)

        Returns:
            변경 후 합계

        Raises:
            LookupError: 사용자가 없는 경우
        """
        row = await self.db.fetchone(
            "SELECT total_expense FROM users WHERE user_id = ?",
            (user_id,),
        )
        if row is None:
            raise LookupError(f"User not found: {user_id}")

        new_total = Decimal(str(row[0])) + delta

        await self.db.execute(
            "UPDATE users SET total_expense = ? WHERE user_id = ?",
            (str(new_total), user_id),
        )

        return new_total

    async def update_password(self, user_id: str, password_hash: str) -> bool:
        """비밀번호 해시 변경

        Returns:
            변경 여부
        """
        cursor = await self.db.execute(
            "UPDATE users SET password_hash = ? WHERE user_id = ?",
            (password_hash, user_id),
        )
        return cursor.rowcount > 0

    async def set_premium(self, email: str) -> bool:
        """프리미엄 전환

        이미 프리미엄인 사용자는 변경하지 않음.

        Returns:
            실제 변경 여부 (사용자 없음/이미 프리미엄이면 False)
        """
        cursor = await self.db.execute(
            "UPDATE users SET is_premium = 1 WHERE email = ? AND is_premium = 0",
            (email,),
        )
        await self.db.commit()
        return cursor.rowcount > 0

    async def top_by_total(self, limit: int = 100) -> list[tuple[str, Decimal]]:
        """지출 합계 상위 사용자

        Args:
            limit: 최대 개수

        Returns:
            (name, total_expense) 목록 (합계 내림차순)
        """
        rows = await self.db.fetchall(
            """
            SELECT name, total_expense FROM users
            ORDER BY CAST(total_expense AS REAL) DESC, created_at ASC
            LIMIT ?
            """,
            (limit,),
        )
        return [(row[0], Decimal(str(row[1]))) for row in rows]
