"""
Premium API 라우터

POST /api/premium/order   - 결제 주문 생성
POST /api/premium/update  - 프리미엄 전환
GET  /api/premium/status  - 프리미엄 여부 조회
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from adapters.interfaces import PaymentGatewayError
from core.errors import NotFoundError, ValidationError
from web.dependencies import get_db, get_payment_gateway
from web.models.requests import PremiumUpdateRequest
from web.models.responses import (
    MessageResponse,
    PremiumOrderResponse,
    PremiumStatusResponse,
)
from web.services.premium_service import PremiumService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/premium", tags=["Premium"])


@router.post("/order", response_model=PremiumOrderResponse)
async def create_order(
    db=Depends(get_db),
    gateway=Depends(get_payment_gateway),
) -> PremiumOrderResponse:
    """결제 주문 생성

    게이트웨이 미설정 시 503.
    """
    if gateway is None:
        raise HTTPException(
            status_code=503,
            detail="Payment gateway is not configured",
        )

    service = PremiumService(db, gateway)

    try:
        order = await service.create_order()
    except PaymentGatewayError as e:
        logger.error(f"Order creation failed: {e}")
        raise HTTPException(status_code=500, detail="Error creating order")

    return PremiumOrderResponse(**order)


@router.post("/update", response_model=MessageResponse)
async def update_premium_status(
    request: PremiumUpdateRequest,
    db=Depends(get_db),
) -> MessageResponse:
    """프리미엄 전환"""
    service = PremiumService(db)

    try:
        await service.update_premium_status(request.email)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return MessageResponse(message="Premium status updated")


@router.get("/status", response_model=PremiumStatusResponse)
async def get_premium_status(
    email: str = Query("", description="이메일"),
    db=Depends(get_db),
) -> PremiumStatusResponse:
    """프리미엄 여부 조회"""
    service = PremiumService(db)

    try:
        is_premium = await service.get_premium_status(email)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return PremiumStatusResponse(isPremium=is_premium)
