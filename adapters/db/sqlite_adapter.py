"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
요청마다 별도 연결을 열어 동시 요청이 서로의 트랜잭션에 섞이지 않도록 함.

주의: SQLite alias로 time, count 사용 금지 (예약어)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

logger = logging.getLogger(__name__)


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    # 디렉토리가 없으면 생성
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path_str)

    # WAL 모드 설정 (읽기는 쓰기 트랜잭션과 동시에 진행)
    await conn.execute("PRAGMA journal_mode=WAL")

    # 쓰기 잠금 대기 (초과 시 트랜잭션 실패 → 롤백)
    await conn.execute("PRAGMA busy_timeout=30000")

    # 외래 키 제약 활성화
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.debug("SQLite 연결 생성", extra={"db_path": db_path_str})

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    WAL 모드로 SQLite 연결 관리.
    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        async with db.transaction(immediate=True):
            await db.execute("INSERT INTO ...")
            await db.execute("UPDATE ...")
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path)

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.debug("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(
        self,
        immediate: bool = False,
    ) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외 시 자동 롤백.

        Args:
            immediate: True면 BEGIN IMMEDIATE로 시작하여 쓰기 잠금을 먼저 확보.
                읽고-계산하고-쓰는 갱신(합계 증감)은 반드시 immediate 사용.

        사용 예시:
        ```python
        async with adapter.transaction(immediate=True) as conn:
            await conn.execute("INSERT INTO ...")
            # 성공 시 자동 커밋
        ```
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if immediate:
            await self._conn.execute("BEGIN IMMEDIATE")

        try:
            yield self._conn
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    사용자 삭제 정책: 지출/재설정 토큰이 남아 있는 사용자는 삭제 불가
    (ON DELETE RESTRICT).

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    # users (total_expense = 해당 사용자 expenses.amount 합계)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS users (
            user_id          TEXT PRIMARY KEY,
            email            TEXT NOT NULL UNIQUE,
            name             TEXT NOT NULL,
            password_hash    TEXT NOT NULL,
            is_premium       INTEGER NOT NULL DEFAULT 0,
            total_expense    TEXT NOT NULL DEFAULT '0',

            created_at       TEXT NOT NULL
        )
    """)

    # expenses (원장, 추가/삭제만 허용)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS expenses (
            seq              INTEGER PRIMARY KEY AUTOINCREMENT,
            expense_id       TEXT NOT NULL UNIQUE,
            user_id          TEXT NOT NULL,

            amount           TEXT NOT NULL,
            description      TEXT NOT NULL,
            category         TEXT NOT NULL,

            created_at       TEXT NOT NULL,

            FOREIGN KEY (user_id) REFERENCES users(user_id) ON DELETE RESTRICT
        )
    """)

    # password_resets
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS password_resets (
            token            TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            expires_at       TEXT NOT NULL,
            created_at       TEXT NOT NULL,

            FOREIGN KEY (user_id) REFERENCES users(user_id) ON DELETE RESTRICT
        )
    """)

    # 인덱스 생성
    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_expenses_user_created
        ON expenses(user_id, created_at)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_password_resets_expires_at
        ON password_resets(expires_at)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")
