"""
Auth 서비스

회원가입, 로그인, 비밀번호 재설정.

계정 존재 여부 노출 방지:
- 로그인 실패는 "사용자 없음"과 "비밀번호 불일치"를 같은 예외로 처리
- 비밀번호 찾기는 이메일 존재 여부와 무관하게 항상 같은 성공 응답
"""

import logging
import sqlite3
import uuid
from datetime import datetime, timedelta

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import IMailer
from core.constants import Defaults
from core.domain.models import User
from core.errors import AuthFailure, ConflictError, ValidationError
from core.security import hash_password, verify_password
from core.storage.password_reset_store import PasswordResetStore
from core.storage.user_store import UserStore
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


RESET_SUBJECT = "Password Reset"
RESET_SENT_MESSAGE = "If email exists, reset link sent"


class AuthService:
    """Auth 서비스

    Args:
        db: SQLiteAdapter 인스턴스
        mailer: 메일 발송기 (None이면 발송 생략, 로그만 기록)
        base_url: 재설정 링크 기준 URL
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        mailer: IMailer | None = None,
        base_url: str = Defaults.WEB_BASE_URL,
    ):
        self.db = db
        self.mailer = mailer
        self.base_url = base_url.rstrip("/")
        self.users = UserStore(db)
        self.resets = PasswordResetStore(db)

    async def signup(self, name: str, email: str, password: str) -> User:
        """회원가입

        Raises:
            ValidationError: 필수 값 누락
            ConflictError: 이미 가입된 이메일
        """
        if not name or not email or not password:
            raise ValidationError("All fields are required")

        if await self.users.find_by_email(email) is not None:
            raise ConflictError("Email already exists")

        password_hash = await hash_password(password)

        try:
            async with self.db.transaction():
                user = await self.users.create(
                    email=email,
                    name=name,
                    password_hash=password_hash,
                )
        except sqlite3.IntegrityError as e:
            # 동시 가입 경쟁
            raise ConflictError("Email already exists") from e

        logger.info(f"User signed up: {user.user_id}")
        return user

    async def login(self, email: str, password: str) -> User:
        """로그인

        Raises:
            ValidationError: 필수 값 누락
            AuthFailure: 사용자 없음 또는 비밀번호 불일치 (구분하지 않음)
        """
        if not email or not password:
            raise ValidationError("All fields are required")

        user = await self.users.find_by_email(email)
        if user is None or not await verify_password(password, user.password_hash):
            raise AuthFailure("Invalid email or password")

        return user

    def build_reset_link(self, token: str) -> str:
        """재설정 링크 생성"""
        return f"{self.base_url}/reset-password/{token}"

    async def forgot_password(
        self,
        email: str,
        now: datetime | None = None,
    ) -> str:
        """비밀번호 재설정 요청

        사용자가 있으면 1시간 유효 토큰 생성 후 메일 발송.
        메일 실패 여부와 무관하게 같은 메시지 반환.

        Raises:
            ValidationError: 이메일 누락

        Returns:
            사용자에게 보여줄 고정 메시지
        """
        if not email:
            raise ValidationError("Email required")

        user = await self.users.find_by_email(email)
        if user is None:
            return RESET_SENT_MESSAGE

        issued_at = now or now_utc()
        token = str(uuid.uuid4())
        await self.resets.create(
            user_id=user.user_id,
            token=token,
            expires_at=issued_at + timedelta(seconds=Defaults.RESET_TOKEN_TTL_SEC),
        )

        if self.mailer is None:
            logger.warning("Mailer 미설정: 재설정 메일 발송 생략")
            return RESET_SENT_MESSAGE

        body = f"Reset your password: {self.build_reset_link(token)}"
        try:
            sent = await self.mailer.send(email, RESET_SUBJECT, body)
        except Exception as e:
            logger.error(f"Reset mail send error: {e}")
            sent = False

        if not sent:
            logger.warning("재설정 메일 발송 실패", extra={"user_id": user.user_id})

        return RESET_SENT_MESSAGE

    async def reset_password(
        self,
        token: str,
        password: str,
        now: datetime | None = None,
    ) -> None:
        """비밀번호 재설정

        새 해시 저장과 토큰 삭제를 하나의 트랜잭션으로 처리.

        Raises:
            ValidationError: 필수 값 누락, 토큰 없음/만료
        """
        if not token or not password:
            raise ValidationError("Token and password required")

        reset = await self.resets.find_valid(token, now)
        if reset is None:
            raise ValidationError("Invalid or expired token")

        password_hash = await hash_password(password)

        async with self.db.transaction(immediate=True):
            await self.users.update_password(reset.user_id, password_hash)
            consumed = await self.resets.delete(token)
            if not consumed:
                # 다른 요청이 먼저 사용함
                raise ValidationError("Invalid or expired token")

        logger.info(f"Password reset: {reset.user_id}")
