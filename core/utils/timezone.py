"""
타임존 유틸리티

내부 저장: UTC | 기간 계산: 서버 로컬 시간 원칙 준수를 위한 헬퍼 함수
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    """현재 서버 로컬 시간 반환 (타임존 포함)"""
    return datetime.now().astimezone()


def to_db_ts(dt: datetime) -> str:
    """DB 저장용 UTC ISO 문자열

    마이크로초까지 고정 자릿수로 기록하여 문자열 비교가 시간 순서와 일치.

    Args:
        dt: datetime 객체 (naive면 로컬 시간으로 간주)

    Returns:
        예: '2024-03-10T03:00:00.000000+00:00'
    """
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_db_ts(value: str) -> datetime:
    """DB 문자열을 UTC datetime으로 변환"""
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_timestamp_ms(dt: datetime) -> int:
    """datetime을 밀리초 타임스탬프로 변환

    Args:
        dt: datetime 객체 (타임존 포함 권장)

    Returns:
        Unix 타임스탬프 (밀리초)
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)
