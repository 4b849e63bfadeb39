"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.auth_service import AuthService
from web.services.expense_service import ExpenseService
from web.services.leaderboard_service import LeaderboardService
from web.services.premium_service import PremiumService

__all__ = [
    "AuthService",
    "ExpenseService",
    "LeaderboardService",
    "PremiumService",
]
