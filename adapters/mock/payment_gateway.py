"""
Mock 결제 게이트웨이

테스트용 Mock Payment Gateway.
IPaymentGateway Protocol 준수.
"""

from typing import Any

from adapters.interfaces import PaymentGatewayError


class MockPaymentGateway:
    """Mock 결제 게이트웨이

    생성된 주문을 기록. should_fail이면 PaymentGatewayError.
    """

    def __init__(self, key_id: str = "rzp_test_mock", should_fail: bool = False):
        self._key_id = key_id
        self.should_fail = should_fail
        self.orders: list[dict[str, Any]] = []

    @property
    def key_id(self) -> str:
        return self._key_id

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
    ) -> dict[str, Any]:
        """주문 생성"""
        if self.should_fail:
            raise PaymentGatewayError("gateway unavailable")

        order = {
            "id": f"order_mock{len(self.orders) + 1:04d}",
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
        }
        self.orders.append(order)
        return order
