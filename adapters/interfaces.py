"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Any, Protocol, runtime_checkable


class ObjectNotFound(Exception):
    """객체 저장소에 해당 키가 없음"""

    pass


class PaymentGatewayError(Exception):
    """결제 게이트웨이 호출 실패"""

    pass


@runtime_checkable
class IObjectStore(Protocol):
    """객체 저장소 인터페이스 (S3 등)

    지출 내보내기 파일의 유일한 외부 의존성.
    """

    async def put(self, key: str, body: bytes, content_type: str) -> None:
        """객체 저장 (기존 내용 전체 덮어쓰기)

        Args:
            key: 객체 키
            body: 내용
            content_type: MIME 타입

        Raises:
            Exception: 저장 실패 (호출자가 로그 처리)
        """
        ...

    async def get(self, key: str) -> bytes:
        """객체 조회

        Raises:
            ObjectNotFound: 키가 없는 경우
        """
        ...


@runtime_checkable
class IMailer(Protocol):
    """메일 발송 인터페이스"""

    async def send(self, to: str, subject: str, body: str) -> bool:
        """메일 발송

        Args:
            to: 수신자 이메일
            subject: 제목
            body: 본문 (텍스트)

        Returns:
            발송 성공 여부 (예외 대신 False 반환)
        """
        ...


@runtime_checkable
class IPaymentGateway(Protocol):
    """결제 게이트웨이 인터페이스"""

    @property
    def key_id(self) -> str:
        """클라이언트 결제창에 전달할 공개 키"""
        ...

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
    ) -> dict[str, Any]:
        """주문 생성

        Args:
            amount: 금액 (최소 화폐 단위, 예: paise)
            currency: 통화 코드
            receipt: 영수증 번호

        Returns:
            {"id": ..., "amount": ..., "currency": ...}

        Raises:
            PaymentGatewayError: 주문 생성 실패
        """
        ...
