"""Revenue aggregation for the income chart.

Four income sources are tracked per day:

- ``hunting``: meso gained while hunting (sum of session deltas).
- ``pieces``: Sol Erda pieces gained, valued at the day's piece price.
- ``boss``: boss crystals, each split across the party and floored.
- ``item_drop``: sale price of notable drops.

Daily records are the base unit. Weekly records fold them by
:func:`maple_diary.calendar_periods.week_ranges`; yearly records fold each
month into one record. :func:`aggregate` then sums a window and computes the
average over the periods that actually had income.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from datetime import date
from typing import TypeVar

from .bosses import clear_period_start, get_boss
from .calendar_periods import (
    format_short_date,
    month_dates,
    week_buckets,
    week_ranges,
    week_start_date,
)
from .logging_setup import get_logger
from .models import (
    BossClear,
    DailyTotal,
    ItemDrop,
    Period,
    PeriodIncomeRecord,
    RevenueSummary,
    WeekBucket,
    WeeklyBossSummary,
)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

_logger = get_logger("maple_diary.revenue")


# ---------------------------------------------------------------------------
# Per-source income
# ---------------------------------------------------------------------------


def boss_clear_income(clears: Iterable[BossClear]) -> int:
    return sum(c.personal_income for c in clears)


def item_drop_income(drops: Iterable[ItemDrop]) -> int:
    return sum(d.price for d in drops)


def piece_value(total_pieces: int, unit_price: int) -> int:
    return total_pieces * unit_price


def weekly_boss_summary(clears: Iterable[BossClear], week_start: date) -> WeeklyBossSummary:
    """Fold the weekly-boss clears that count toward the reset week holding ``week_start``.

    ``week_start`` is normalized to its Thursday. Monthly-boss clears belong to
    the monthly reset and are left out. Unknown boss ids raise ``KeyError``.
    """

    start = week_start_date(week_start)
    in_week = [
        c
        for c in clears
        if not get_boss(c.boss_id).is_monthly
        and clear_period_start(c.boss_id, c.cleared_date) == start
    ]
    return WeeklyBossSummary(
        week_start_date=start,
        total_crystal_income=boss_clear_income(in_week),
        boss_count=len(in_week),
    )


def _group(items: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
    out: dict[K, list[T]] = defaultdict(list)
    for item in items:
        out[key(item)].append(item)
    return out


def _fold(key: int, label: str, records: Iterable[PeriodIncomeRecord]) -> PeriodIncomeRecord:
    hunting = pieces = boss = item_drop = 0
    for r in records:
        hunting += r.hunting
        pieces += r.pieces
        boss += r.boss
        item_drop += r.item_drop
    return PeriodIncomeRecord(
        key=key, label=label, hunting=hunting, pieces=pieces, boss=boss, item_drop=item_drop
    )


# ---------------------------------------------------------------------------
# Record builders
# ---------------------------------------------------------------------------


def build_daily_records(
    year: int,
    month0: int,
    daily_totals: Mapping[date, DailyTotal],
    boss_clears: Iterable[BossClear] = (),
    item_drops: Iterable[ItemDrop] = (),
) -> list[PeriodIncomeRecord]:
    """One record per day of the month, labelled ``m/d``.

    Days without data get an all-zero record so the chart has a bar slot for
    every day.
    """

    clears_by_day = _group(boss_clears, lambda c: c.cleared_date)
    drops_by_day = _group(item_drops, lambda d: d.date)

    records: list[PeriodIncomeRecord] = []
    for d in month_dates(year, month0):
        total = daily_totals.get(d)
        records.append(
            PeriodIncomeRecord(
                key=d.day,
                label=format_short_date(d),
                hunting=total.total_meso_gained if total else 0,
                pieces=total.piece_value if total else 0,
                boss=boss_clear_income(clears_by_day.get(d, ())),
                item_drop=item_drop_income(drops_by_day.get(d, ())),
            )
        )
    return records


def build_week_buckets(
    year: int, month0: int, daily_records: Sequence[PeriodIncomeRecord]
) -> list[WeekBucket]:
    """Week buckets whose ``aggregated_income`` is the sum of daily totals."""

    by_day = {r.key: r.total for r in daily_records}
    return week_buckets(year, month0, lambda day: by_day.get(day, 0))


def build_weekly_records(
    year: int, month0: int, daily_records: Sequence[PeriodIncomeRecord]
) -> list[PeriodIncomeRecord]:
    """Per-source sums for each week of the month, labelled ``N주차``."""

    out: list[PeriodIncomeRecord] = []
    for n, (start, end) in enumerate(week_ranges(year, month0), start=1):
        days = [r for r in daily_records if start <= r.key <= end]
        out.append(_fold(n, f"{n}주차", days))
    return out


def build_monthly_record(
    month: int, daily_records: Iterable[PeriodIncomeRecord]
) -> PeriodIncomeRecord:
    """Fold a month of daily records; ``month`` is 1-based."""

    return _fold(month, f"{month}월", daily_records)


def build_yearly_records(
    year: int,
    daily_totals: Mapping[date, DailyTotal],
    boss_clears: Iterable[BossClear] = (),
    item_drops: Iterable[ItemDrop] = (),
) -> list[PeriodIncomeRecord]:
    """Twelve monthly records for ``year``, labelled ``1월`` .. ``12월``."""

    clears = [c for c in boss_clears if c.cleared_date.year == year]
    drops = [d for d in item_drops if d.date.year == year]
    out: list[PeriodIncomeRecord] = []
    for month0 in range(12):
        daily = build_daily_records(
            year,
            month0,
            daily_totals,
            [c for c in clears if c.cleared_date.month == month0 + 1],
            [d for d in drops if d.date.month == month0 + 1],
        )
        out.append(build_monthly_record(month0 + 1, daily))
    return out


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def select_week(buckets: Iterable[WeekBucket], week_number: int | None) -> WeekBucket | None:
    if week_number is None:
        return None
    for b in buckets:
        if b.week_number == week_number:
            return b
    return None


def aggregate(
    period: Period | str,
    source: Iterable[PeriodIncomeRecord],
    selector: WeekBucket | None = None,
) -> RevenueSummary:
    """Sum ``source`` per income source and average over periods with data.

    In weekly mode a ``selector`` narrows daily records to the bucket's day
    range first; without one the whole month is summed. Yearly mode expects
    monthly records, so the average becomes a per-month figure. Empty input
    yields an all-zero summary.
    """

    mode = Period(period)
    records = list(source)
    if mode is Period.WEEKLY and selector is not None:
        records = [r for r in records if selector.contains(r.key)]

    folded = _fold(0, "", records)
    grand_total = folded.total
    count_with_data = sum(1 for r in records if r.total > 0)
    average = grand_total // count_with_data if count_with_data > 0 else 0

    _logger.debug(
        "aggregated %d %s records: total=%d periods_with_data=%d",
        len(records),
        mode.value,
        grand_total,
        count_with_data,
    )
    return RevenueSummary(
        hunting=folded.hunting,
        pieces=folded.pieces,
        boss=folded.boss,
        item_drop=folded.item_drop,
        grand_total=grand_total,
        count_with_data=count_with_data,
        average=average,
    )


def chart_series(
    period: Period | str,
    *,
    daily: Sequence[PeriodIncomeRecord],
    weekly: Sequence[PeriodIncomeRecord],
    yearly: Sequence[PeriodIncomeRecord],
    selected_week: WeekBucket | None = None,
) -> list[PeriodIncomeRecord]:
    """Records the chart plots for ``period``.

    Weekly mode shows one bar per week, or the selected week's days.
    """

    mode = Period(period)
    if mode is Period.YEARLY:
        return list(yearly)
    if mode is Period.WEEKLY:
        if selected_week is None:
            return list(weekly)
        return [r for r in daily if selected_week.contains(r.key)]
    return list(daily)


__all__ = [
    "aggregate",
    "boss_clear_income",
    "build_daily_records",
    "build_monthly_record",
    "build_week_buckets",
    "build_weekly_records",
    "build_yearly_records",
    "chart_series",
    "item_drop_income",
    "piece_value",
    "select_week",
    "weekly_boss_summary",
]
