"""Public orchestration for the ``maple_diary`` package.

The building blocks live in :mod:`maple_diary.gains`,
:mod:`maple_diary.calendar_periods` and :mod:`maple_diary.revenue`. This
module wires them together for the two views a diary front-end renders: the
monthly calendar and the revenue chart with its summary cards.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .calendar_periods import calendar_grid, date_key
from .gains import daily_totals, has_level_up
from .ingest import DiaryData
from .models import DailyTotal, Period, PeriodIncomeRecord, RevenueSummary, WeekBucket
from .revenue import (
    aggregate,
    build_daily_records,
    build_week_buckets,
    build_weekly_records,
    build_yearly_records,
    chart_series,
    select_week,
)


@dataclass(frozen=True, slots=True)
class CalendarCell:
    """One day of the calendar view. ``total`` is ``None`` on days without hunts."""

    day: int
    date_key: str
    total: DailyTotal | None
    income: int = 0

    @property
    def leveled_up(self) -> bool:
        return self.total is not None and has_level_up(self.total.total_exp_gained)


@dataclass(frozen=True, slots=True)
class RevenueReport:
    """Everything the revenue chart needs for one ``(year, month, period)`` view."""

    period: Period
    year: int
    month0: int
    daily: list[PeriodIncomeRecord]
    weekly: list[PeriodIncomeRecord]
    yearly: list[PeriodIncomeRecord]
    buckets: list[WeekBucket]
    selected_week: WeekBucket | None
    series: list[PeriodIncomeRecord]
    summary: RevenueSummary


def calendar_cells(data: DiaryData, year: int, month0: int) -> list[CalendarCell | None]:
    """Calendar grid for a month with each day's rollup and income attached."""

    totals = daily_totals(data.sessions)
    daily = {
        r.key: r
        for r in build_daily_records(year, month0, totals, data.boss_clears, data.item_drops)
    }
    cells: list[CalendarCell | None] = []
    for day in calendar_grid(year, month0):
        if day is None:
            cells.append(None)
            continue
        key = date_key(year, month0, day)
        record = daily[day]
        cells.append(
            CalendarCell(
                day=day,
                date_key=key,
                total=totals.get(date(year, month0 + 1, day)),
                income=record.total,
            )
        )
    return cells


def revenue_report(
    data: DiaryData,
    year: int,
    month0: int,
    *,
    period: Period | str = Period.MONTHLY,
    week_number: int | None = None,
) -> RevenueReport:
    """Build chart series and summary for the requested view.

    ``week_number`` only matters in weekly mode; an unknown week number is
    treated as "no week selected" and the whole month is summarized.
    """

    mode = Period(period)
    totals = daily_totals(data.sessions)
    daily = build_daily_records(year, month0, totals, data.boss_clears, data.item_drops)
    weekly = build_weekly_records(year, month0, daily)
    buckets = build_week_buckets(year, month0, daily)
    yearly = build_yearly_records(year, totals, data.boss_clears, data.item_drops)

    selected = select_week(buckets, week_number) if mode is Period.WEEKLY else None
    source = yearly if mode is Period.YEARLY else daily
    return RevenueReport(
        period=mode,
        year=year,
        month0=month0,
        daily=daily,
        weekly=weekly,
        yearly=yearly,
        buckets=buckets,
        selected_week=selected,
        series=chart_series(
            mode, daily=daily, weekly=weekly, yearly=yearly, selected_week=selected
        ),
        summary=aggregate(mode, source, selected),
    )


__all__ = ["CalendarCell", "RevenueReport", "calendar_cells", "revenue_report"]
