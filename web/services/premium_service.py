"""
Premium 서비스

결제 주문 생성 및 프리미엄 상태 관리.
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import IPaymentGateway
from core.constants import PremiumPlan
from core.errors import NotFoundError, ValidationError
from core.storage.user_store import UserStore
from core.utils.timezone import now_utc, to_timestamp_ms

logger = logging.getLogger(__name__)


class PremiumService:
    """Premium 서비스

    Args:
        db: SQLiteAdapter 인스턴스
        gateway: 결제 게이트웨이 (주문 생성 시에만 필요)
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        gateway: IPaymentGateway | None = None,
    ):
        self.db = db
        self.gateway = gateway
        self.users = UserStore(db)

    async def create_order(self) -> dict[str, Any]:
        """프리미엄 결제 주문 생성

        Returns:
            {"orderId", "amount", "currency", "keyId"}

        Raises:
            RuntimeError: 게이트웨이 미설정
            PaymentGatewayError: 주문 생성 실패
        """
        if self.gateway is None:
            raise RuntimeError("Payment gateway is not configured")

        receipt = f"{PremiumPlan.RECEIPT_PREFIX}{to_timestamp_ms(now_utc())}"
        order = await self.gateway.create_order(
            amount=PremiumPlan.AMOUNT,
            currency=PremiumPlan.CURRENCY,
            receipt=receipt,
        )

        return {
            "orderId": order["id"],
            "amount": order["amount"],
            "currency": order["currency"],
            "keyId": self.gateway.key_id,
        }

    async def update_premium_status(self, email: str) -> None:
        """프리미엄 전환

        Raises:
            ValidationError: 이메일 누락
            NotFoundError: 사용자가 없거나 이미 프리미엄
        """
        if not email:
            raise ValidationError("Email is required")

        updated = await self.users.set_premium(email)
        if not updated:
            raise NotFoundError("User not found or already premium")

        logger.info("Premium activated", extra={"email": email})

    async def get_premium_status(self, email: str) -> bool:
        """프리미엄 여부 조회

        Raises:
            ValidationError: 이메일 누락
            NotFoundError: 사용자가 없는 경우
        """
        if not email:
            raise ValidationError("Email is required")

        user = await self.users.find_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        return user.is_premium
