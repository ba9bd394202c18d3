"""Calendar grids, week buckets and boss reset periods.

Months are zero-indexed (``0`` = January) to match the calendar view; weekday
indices are Sunday-first (``0`` = Sunday, ``6`` = Saturday). Out-of-range
months fail fast with ``ValueError`` instead of rolling over into a
neighbouring year.

Week buckets close on Saturday or on the last day of the month, whichever
comes first, so a month yields 4-6 buckets and no bucket crosses a month
boundary. Boss reset periods are a separate concept: weekly bosses reset on
Thursday, monthly bosses on the 1st.
"""

from __future__ import annotations

import calendar
from collections.abc import Callable
from datetime import date, timedelta

from .models import WeekBucket

SATURDAY: int = 6
# ``date.weekday()`` index of Thursday, the weekly boss reset day.
_THURSDAY: int = 3


def _check_month(month0: int) -> int:
    if isinstance(month0, bool) or not isinstance(month0, int):
        raise ValueError(f"month must be an integer 0-11, got {month0!r}")
    if not 0 <= month0 <= 11:
        raise ValueError(f"month must be in 0-11 (zero-indexed), got {month0}")
    return month0


def weekday_sunday_first(d: date) -> int:
    """Weekday index with Sunday as 0 and Saturday as 6."""

    return (d.weekday() + 1) % 7


def days_in_month(year: int, month0: int) -> int:
    _check_month(month0)
    return calendar.monthrange(year, month0 + 1)[1]


def calendar_grid(year: int, month0: int) -> list[int | None]:
    """Day numbers of the month, preceded by ``None`` pads up to its first weekday."""

    n = days_in_month(year, month0)
    leading = weekday_sunday_first(date(year, month0 + 1, 1))
    return [None] * leading + list(range(1, n + 1))


def week_ranges(year: int, month0: int) -> list[tuple[int, int]]:
    """``(start_day, end_day)`` per week, closing on Saturday or month end."""

    n = days_in_month(year, month0)
    first = weekday_sunday_first(date(year, month0 + 1, 1))
    ranges: list[tuple[int, int]] = []
    start = 1
    for day in range(1, n + 1):
        if (first + day - 1) % 7 == SATURDAY or day == n:
            ranges.append((start, day))
            start = day + 1
    return ranges


def week_buckets(
    year: int,
    month0: int,
    per_day_value: Callable[[int], float] | None = None,
) -> list[WeekBucket]:
    """Group the month's days into :class:`WeekBucket` objects.

    ``per_day_value`` maps a day number to that day's income; it defaults to
    zero for every day.
    """

    value = per_day_value or (lambda _day: 0)
    return [
        WeekBucket(
            week_number=i,
            start_day=start,
            end_day=end,
            aggregated_income=sum(value(d) for d in range(start, end + 1)),
        )
        for i, (start, end) in enumerate(week_ranges(year, month0), start=1)
    ]


def shift_month(year: int, month0: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months from ``(year, month0)``; used for prev/next navigation."""

    _check_month(month0)
    y, m = divmod(year * 12 + month0 + delta, 12)
    return y, m


def date_key(year: int, month0: int, day: int) -> str:
    """``YYYY-MM-DD`` key used by the persistence layer."""

    _check_month(month0)
    return date(year, month0 + 1, day).isoformat()


def month_dates(year: int, month0: int) -> list[date]:
    return [date(year, month0 + 1, d) for d in range(1, days_in_month(year, month0) + 1)]


# ---------------------------------------------------------------------------
# Boss reset periods
# ---------------------------------------------------------------------------


def week_start_date(d: date) -> date:
    """Most recent Thursday on or before ``d`` (weekly boss reset)."""

    return d - timedelta(days=(d.weekday() - _THURSDAY) % 7)


def month_start_date(d: date) -> date:
    return d.replace(day=1)


def next_weekly_reset(week_start: date) -> date:
    return week_start + timedelta(days=7)


def next_monthly_reset(month_start: date) -> date:
    y, m = shift_month(month_start.year, month_start.month - 1, 1)
    return date(y, m + 1, 1)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"invalid YYYY-MM-DD date: {value!r}") from exc


def format_date(value: date | str) -> str:
    """``2024년 2월 5일``."""

    d = _as_date(value)
    return f"{d.year}년 {d.month}월 {d.day}일"


def format_short_date(value: date | str) -> str:
    """``2/5``."""

    d = _as_date(value)
    return f"{d.month}/{d.day}"


__all__ = [
    "SATURDAY",
    "calendar_grid",
    "date_key",
    "days_in_month",
    "format_date",
    "format_short_date",
    "month_dates",
    "month_start_date",
    "next_monthly_reset",
    "next_weekly_reset",
    "shift_month",
    "week_buckets",
    "week_ranges",
    "week_start_date",
    "weekday_sunday_first",
]
