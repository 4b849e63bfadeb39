"""
스토리지 모듈

User Store, Expense Store, Password Reset Store 등 데이터 저장소 제공
"""

from core.storage.expense_store import ExpenseStore
from core.storage.password_reset_store import PasswordResetStore
from core.storage.user_store import UserStore

__all__ = [
    "ExpenseStore",
    "PasswordResetStore",
    "UserStore",
]
