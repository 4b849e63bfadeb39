"""
조회 기간 계산

일/주/월/연 단위 조회 범위를 서버 로컬 시간 기준으로 계산.
- day: 오늘 00:00:00 ~ 23:59:59.999999
- week: 이번 주 일요일 ~ 토요일
- month: 이번 달 1일 ~ 말일
- year: 1월 1일 ~ 12월 31일

범위는 양 끝 포함 (start <= created_at <= end).
"""

import calendar
from datetime import date, datetime, time, timedelta

from core.types import TimeWindow
from core.utils.timezone import now_local


def _local(day: date, at: time) -> datetime:
    # naive 로컬 시각 → aware (DST 반영)
    return datetime.combine(day, at).astimezone()


def _day_range(start: date, end: date) -> tuple[datetime, datetime]:
    return _local(start, time.min), _local(end, time.max)


def window_range(
    window: TimeWindow | str,
    now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """조회 기간 범위 계산

    Args:
        window: 기간 단위 (day/week/month/year)
        now: 기준 시각 (None이면 현재 로컬 시간, naive면 로컬 시간으로 간주)

    Returns:
        (start, end) 로컬 타임존 aware datetime

    Example:
        >>> start, end = window_range("week", datetime(2024, 3, 10, 12))
        >>> start.date(), end.date()
        (datetime.date(2024, 3, 10), datetime.date(2024, 3, 16))
    """
    window = TimeWindow(window)
    anchor = (now or now_local()).astimezone()
    today = anchor.date()

    if window == TimeWindow.DAY:
        return _day_range(today, today)

    if window == TimeWindow.WEEK:
        # date.weekday(): 월=0 ... 일=6 → 일요일 기준 오프셋
        offset = (today.weekday() + 1) % 7
        sunday = today - timedelta(days=offset)
        return _day_range(sunday, sunday + timedelta(days=6))

    if window == TimeWindow.MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return _day_range(
            today.replace(day=1),
            today.replace(day=last_day),
        )

    return _day_range(date(today.year, 1, 1), date(today.year, 12, 31))
