"""Public interface for the ``maple_diary`` package.

This module exposes the package's API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .api import CalendarCell, RevenueReport, calendar_cells, revenue_report
from .bosses import (
    BOSSES,
    Boss,
    BossSetting,
    clear_period_start,
    crystal_price,
    difficulty_label,
    get_boss,
    sort_boss_settings,
)
from .calendar_periods import (
    calendar_grid,
    format_date,
    format_short_date,
    shift_month,
    week_buckets,
    week_start_date,
)
from .config import DEFAULT_PIECE_PRICE, LocaleUnits, Settings, load_settings
from .experience import format_exp_short, format_exp_with_percent, load_exp_table
from .gains import compute_gains, daily_totals, has_level_up, sojaebi
from .ingest import DiaryData, load_diary_export
from .meso import format_meso, format_meso_detailed, format_meso_short, parse_meso
from .models import (
    BossClear,
    DailyTotal,
    DraftSession,
    ItemDrop,
    Period,
    PeriodIncomeRecord,
    PersistedSession,
    ProgressReading,
    ProgressSnapshot,
    RevenueSummary,
    Session,
    SessionGain,
    WeekBucket,
    WeeklyBossSummary,
    to_progress_snapshot,
)
from .revenue import aggregate, build_daily_records, build_yearly_records, weekly_boss_summary

__all__ = [
    # API
    "calendar_cells",
    "revenue_report",
    "CalendarCell",
    "RevenueReport",
    # Gains
    "compute_gains",
    "daily_totals",
    "has_level_up",
    "sojaebi",
    # Formatting
    "format_meso",
    "format_meso_short",
    "format_meso_detailed",
    "parse_meso",
    "format_exp_with_percent",
    "format_exp_short",
    "format_date",
    "format_short_date",
    # Calendar
    "calendar_grid",
    "week_buckets",
    "shift_month",
    "week_start_date",
    # Revenue
    "aggregate",
    "build_daily_records",
    "build_yearly_records",
    "weekly_boss_summary",
    # Bosses
    "BOSSES",
    "Boss",
    "BossSetting",
    "get_boss",
    "crystal_price",
    "difficulty_label",
    "clear_period_start",
    "sort_boss_settings",
    # Input / config
    "load_diary_export",
    "load_exp_table",
    "load_settings",
    "DiaryData",
    "Settings",
    "LocaleUnits",
    "DEFAULT_PIECE_PRICE",
    # Models / types
    "ProgressReading",
    "ProgressSnapshot",
    "DraftSession",
    "PersistedSession",
    "Session",
    "SessionGain",
    "DailyTotal",
    "BossClear",
    "ItemDrop",
    "Period",
    "PeriodIncomeRecord",
    "WeekBucket",
    "RevenueSummary",
    "WeeklyBossSummary",
    "to_progress_snapshot",
]
