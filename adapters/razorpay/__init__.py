"""
Razorpay 어댑터

프리미엄 결제 주문 생성.
IPaymentGateway Protocol 준수.
"""

from adapters.razorpay.gateway import RazorpayGateway

__all__ = [
    "RazorpayGateway",
]
