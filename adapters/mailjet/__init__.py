"""
Mailjet 어댑터

비밀번호 재설정 메일 발송.
IMailer Protocol 준수.
"""

from adapters.mailjet.mailer import MailjetMailer

__all__ = [
    "MailjetMailer",
]
