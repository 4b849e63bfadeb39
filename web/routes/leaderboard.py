"""
리더보드 API 라우터

GET /api/leaderboard - 지출 합계 상위 사용자
"""

from fastapi import APIRouter, Depends

from web.dependencies import get_db
from web.models.responses import LeaderboardEntry
from web.services.leaderboard_service import LeaderboardService

router = APIRouter(prefix="/api/leaderboard", tags=["Leaderboard"])


@router.get("", response_model=list[LeaderboardEntry])
async def get_leaderboard(db=Depends(get_db)) -> list[LeaderboardEntry]:
    """지출 합계 내림차순 상위 100명"""
    service = LeaderboardService(db)
    rows = await service.get_leaderboard()
    return [LeaderboardEntry(**row) for row in rows]
