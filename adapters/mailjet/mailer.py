"""
Mailjet 메일 발송

Mailjet Send API v3.1을 통해 텍스트 메일 전송.
IMailer Protocol 준수.
"""

import logging
from typing import Any

import httpx

from core.constants import MailjetEndpoints

logger = logging.getLogger(__name__)


class MailjetMailer:
    """Mailjet 메일 발송

    IMailer Protocol 구현.
    실패 시 예외 대신 False 반환.

    사용 예시:
    ```python
    mailer = MailjetMailer(api_key="...", api_secret="...", from_email="no-reply@x.com")
    await mailer.send("a@x.com", "Password Reset", "Reset your password: ...")
    ```
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        from_email: str,
        from_name: str = "Spendwise",
        timeout: float = 10.0,
    ):
        """
        Args:
            api_key: Mailjet API 키
            api_secret: Mailjet API 시크릿
            from_email: 발신 주소
            from_name: 발신자 이름
            timeout: HTTP 요청 타임아웃 (초)
        """
        if not api_key or not api_secret:
            raise ValueError("api_key, api_secret은 필수입니다")

        self.api_key = api_key
        self.api_secret = api_secret
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout

        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 반환 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                auth=(self.api_key, self.api_secret),
            )
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _build_payload(self, to: str, subject: str, body: str) -> dict[str, Any]:
        return {
            "Messages": [
                {
                    "From": {"Email": self.from_email, "Name": self.from_name},
                    "To": [{"Email": to}],
                    "Subject": subject,
                    "TextPart": body,
                }
            ]
        }

    async def send(self, to: str, subject: str, body: str) -> bool:
        """메일 발송

        Returns:
            발송 성공 여부
        """
        payload = self._build_payload(to, subject, body)

        try:
            client = await self._get_client()
            response = await client.post(MailjetEndpoints.SEND_URL, json=payload)

            if response.status_code == 200:
                logger.debug("Mailjet 발송 성공")
                return True

            logger.warning(
                "Mailjet 발송 실패: status=%s, body=%s",
                response.status_code,
                response.text,
            )
            return False

        except httpx.TimeoutException:
            logger.error("Mailjet 발송 타임아웃")
            return False
        except httpx.HTTPError as e:
            logger.error("Mailjet 발송 HTTP 에러: %s", e)
            return False

    async def __aenter__(self) -> "MailjetMailer":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
