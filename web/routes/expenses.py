"""
지출 API 라우터

POST   /api/expenses                - 지출 추가 (201)
GET    /api/expenses                - 전체 지출 (최신순)
GET    /api/expenses/daily|weekly|monthly|yearly - 기간별 지출
DELETE /api/expenses/{expense_id}   - 지출 삭제
GET    /api/expenses/download       - 내보내기 파일 다운로드
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from adapters.interfaces import ObjectNotFound
from core.errors import AtomicStepFailure, NotFoundError, ValidationError
from core.export.projector import export_key
from core.types import TimeWindow
from web.dependencies import (
    get_db,
    get_export_dispatcher,
    get_object_store,
    is_export_available,
)
from web.models.requests import ExpenseCreateRequest
from web.models.responses import (
    ExpenseCreatedResponse,
    ExpenseResponse,
    MessageResponse,
)
from web.services.expense_service import ExpenseService

logger = logging.getLogger(__name__)


def check_export_available():
    """내보내기 저장소 사용 가능 여부 체크

    Raises:
        HTTPException: 저장소 미설정 시 503 반환
    """
    if not is_export_available():
        raise HTTPException(
            status_code=503,
            detail="Export storage is not configured",
        )


router = APIRouter(prefix="/api/expenses", tags=["Expenses"])


# =========================================================================
# 변경 API
# =========================================================================


@router.post("", status_code=201, response_model=ExpenseCreatedResponse)
async def add_expense(
    request: ExpenseCreateRequest,
    db=Depends(get_db),
    dispatcher=Depends(get_export_dispatcher),
) -> ExpenseCreatedResponse:
    """지출 추가

    원장 추가와 사용자 합계 증가를 한 트랜잭션으로 커밋.
    내보내기는 커밋 후 백그라운드에서 진행.
    """
    service = ExpenseService(db, dispatcher)

    try:
        expense = await service.add_expense(
            email=request.email,
            amount=request.amount,
            description=request.description,
            category=request.category,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AtomicStepFailure as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ExpenseCreatedResponse(expense=ExpenseResponse.from_expense(expense))


@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: str,
    db=Depends(get_db),
    dispatcher=Depends(get_export_dispatcher),
) -> MessageResponse:
    """지출 삭제"""
    service = ExpenseService(db, dispatcher)

    try:
        await service.delete_expense(expense_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AtomicStepFailure as e:
        raise HTTPException(status_code=500, detail=str(e))

    return MessageResponse(message="Expense deleted successfully")


# =========================================================================
# 조회 API
# =========================================================================


@router.get("", response_model=list[ExpenseResponse])
async def get_expenses(
    email: str = Query(..., min_length=1, description="소유자 이메일"),
    db=Depends(get_db),
) -> list[ExpenseResponse]:
    """전체 지출 (최신순)"""
    service = ExpenseService(db)

    try:
        expenses = await service.list_expenses(email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return [ExpenseResponse.from_expense(e) for e in expenses]


async def _window_expenses(db, email: str, window: TimeWindow) -> list[ExpenseResponse]:
    service = ExpenseService(db)

    try:
        expenses = await service.list_expenses_in_window(email, window)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return [ExpenseResponse.from_expense(e) for e in expenses]


@router.get("/daily", response_model=list[ExpenseResponse])
async def get_daily_expenses(
    email: str = Query(..., min_length=1),
    db=Depends(get_db),
) -> list[ExpenseResponse]:
    """오늘 지출"""
    return await _window_expenses(db, email, TimeWindow.DAY)


@router.get("/weekly", response_model=list[ExpenseResponse])
async def get_weekly_expenses(
    email: str = Query(..., min_length=1),
    db=Depends(get_db),
) -> list[ExpenseResponse]:
    """이번 주(일~토) 지출"""
    return await _window_expenses(db, email, TimeWindow.WEEK)


@router.get("/monthly", response_model=list[ExpenseResponse])
async def get_monthly_expenses(
    email: str = Query(..., min_length=1),
    db=Depends(get_db),
) -> list[ExpenseResponse]:
    """이번 달 지출"""
    return await _window_expenses(db, email, TimeWindow.MONTH)


@router.get("/yearly", response_model=list[ExpenseResponse])
async def get_yearly_expenses(
    email: str = Query(..., min_length=1),
    db=Depends(get_db),
) -> list[ExpenseResponse]:
    """올해 지출"""
    return await _window_expenses(db, email, TimeWindow.YEAR)


# =========================================================================
# 다운로드 API
# =========================================================================


@router.get("/download")
async def download_expenses(
    email: str = Query("", description="소유자 이메일"),
    object_store=Depends(get_object_store),
) -> Response:
    """내보내기 파일 다운로드

    아직 내보내기가 한 번도 완료되지 않았으면 404.
    """
    if not email:
        raise HTTPException(status_code=400, detail="Email required")

    check_export_available()

    key = export_key(email)

    try:
        body = await object_store.get(key)
    except ObjectNotFound:
        raise HTTPException(status_code=404, detail="No file found")
    except Exception as e:
        logger.error(f"Export download failed: {e}", extra={"key": key})
        raise HTTPException(status_code=404, detail="No file found")

    return Response(
        content=body,
        media_type="text/plain",
        headers={"Content-Disposition": f'attachment; filename="{key}"'},
    )
