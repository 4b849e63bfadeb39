"""
Razorpay 결제 게이트웨이

Razorpay Orders API로 프리미엄 결제 주문 생성.
IPaymentGateway Protocol 준수.
"""

import logging
from typing import Any

import httpx

from adapters.interfaces import PaymentGatewayError
from core.constants import RazorpayEndpoints

logger = logging.getLogger(__name__)


class RazorpayGateway:
    """Razorpay 결제 게이트웨이

    Args:
        key_id: Razorpay Key ID (클라이언트에도 전달)
        key_secret: Razorpay Key Secret
        timeout: HTTP 요청 타임아웃 (초)
    """

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        timeout: float = 15.0,
    ):
        if not key_id or not key_secret:
            raise ValueError("key_id, key_secret은 필수입니다")

        self._key_id = key_id
        self._key_secret = key_secret
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def key_id(self) -> str:
        """공개 Key ID"""
        return self._key_id

    async def _ensure_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 반환 (lazy init)"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=RazorpayEndpoints.BASE_URL,
                timeout=self.timeout,
                auth=(self._key_id, self._key_secret),
            )
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
    ) -> dict[str, Any]:
        """주문 생성

        Raises:
            PaymentGatewayError: API 에러 또는 네트워크 에러
        """
        client = await self._ensure_client()
        body = {"amount": amount, "currency": currency, "receipt": receipt}

        try:
            response = await client.post(RazorpayEndpoints.ORDERS_PATH, json=body)
        except httpx.RequestError as e:
            logger.error(f"Razorpay request error: {e}")
            raise PaymentGatewayError(str(e)) from e

        if response.status_code >= 400:
            try:
                error_msg = response.json().get("error", {}).get("description", response.text)
            except ValueError:
                error_msg = response.text
            logger.error(
                f"Razorpay API error: {response.status_code} - {error_msg}",
                extra={"receipt": receipt},
            )
            raise PaymentGatewayError(error_msg)

        order = response.json()
        logger.info(f"Razorpay order created: {order.get('id')}")
        return order
