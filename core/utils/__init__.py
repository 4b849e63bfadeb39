"""
유틸리티 패키지

타임존 처리 등 공통 유틸리티
"""

from core.utils.timezone import (
    from_db_ts,
    now_local,
    now_utc,
    to_db_ts,
    to_timestamp_ms,
)

__all__ = [
    "from_db_ts",
    "now_local",
    "now_utc",
    "to_db_ts",
    "to_timestamp_ms",
]
