"""
Mock 어댑터

테스트용 Mock 구현체 제공.
Protocol 준수하여 실제 구현체와 교체 가능.
"""

from adapters.mock.mailer import MockMailer
from adapters.mock.object_store import MockObjectStore
from adapters.mock.payment_gateway import MockPaymentGateway

__all__ = [
    "MockMailer",
    "MockObjectStore",
    "MockPaymentGateway",
]
