"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class AppMode(str, Enum):
    """실행 모드 (운영 / 개발)"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class TimeWindow(str, Enum):
    """지출 조회 기간 단위"""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
