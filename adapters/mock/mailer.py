"""
Mock 메일 발송

테스트용 Mock Mailer.
IMailer Protocol 준수.
"""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass
class MailRecord:
    """발송 기록"""

    to: str
    subject: str
    body: str
    timestamp: datetime
    sent: bool


class MockMailer:
    """Mock 메일 발송

    발송된 모든 메일을 기록하여 테스트에서 검증 가능.
    """

    def __init__(self, should_fail: bool = False):
        """
        Args:
            should_fail: True면 모든 발송 실패 (에러 시나리오 테스트용)
        """
        self.should_fail = should_fail
        self.messages: list[MailRecord] = []

    async def send(self, to: str, subject: str, body: str) -> bool:
        """메일 발송"""
        self.messages.append(
            MailRecord(
                to=to,
                subject=subject,
                body=body,
                timestamp=datetime.now(timezone.utc),
                sent=not self.should_fail,
            )
        )
        return not self.should_fail

    @property
    def last_message(self) -> MailRecord | None:
        """마지막 메일 조회"""
        return self.messages[-1] if self.messages else None
