"""Session gain arithmetic.

Experience is tracked as a percent within the current level, so a raw
``end - start`` is wrong across a level-up. Each level crossed is folded in as
a fixed 100 percent points::

    exp_gain = (end.level - start.level) * 100 + (end.exp_percent - start.exp_percent)

No clamping is applied anywhere in this module: spending meso mid-session, or
a data-entry slip, shows up as a negative delta and is passed through to the
caller unchanged.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from .logging_setup import get_logger
from .models import (
    DailyTotal,
    PersistedSession,
    ProgressReading,
    SessionGain,
    Session,
    require_finite,
    to_progress_snapshot,
)

# One "sojaebi" (material-cost unit) buys 30 minutes of hunting.
SOJAEBI_MINUTES: int = 30

LEVEL_UP_THRESHOLD: float = 100.0

_logger = get_logger("maple_diary.gains")


def compute_gains(start: ProgressReading, end: ProgressReading) -> SessionGain:
    """Return the deltas between two readings. Pure; never raises."""

    exp_gain = (end.level - start.level) * 100 + (end.exp_percent - start.exp_percent)
    return SessionGain(
        exp_gain=exp_gain,
        meso_gain=end.meso - start.meso,
        sol_erda_gain=end.sol_erda_total - start.sol_erda_total,
        piece_gain=end.sol_erda_piece - start.sol_erda_piece,
    )


def session_gains(session: Session) -> SessionGain:
    snapshot = to_progress_snapshot(session)
    return compute_gains(snapshot.start, snapshot.end)


def sojaebi(duration_minutes: float) -> float:
    """Convert a hunt duration into sojaebi units (30 minutes each)."""

    require_finite("duration_minutes", duration_minutes)
    if duration_minutes < 0:
        raise ValueError(f"duration_minutes must be non-negative, got {duration_minutes}")
    return duration_minutes / SOJAEBI_MINUTES


def has_level_up(total_exp_gained: float) -> bool:
    """True when a day's summed exp gain covers at least one full level."""

    return total_exp_gained >= LEVEL_UP_THRESHOLD


def progress_index(level: int, exp_percent: float) -> float:
    """Cumulative progress index (``level * 100 + percent``) used for history rows."""

    require_finite("level", level)
    require_finite("exp_percent", exp_percent)
    return level * 100 + exp_percent


def daily_totals(sessions: Iterable[PersistedSession]) -> dict[date, DailyTotal]:
    """Roll persisted sessions up into one :class:`DailyTotal` per date.

    The result is ordered by date. ``avg_piece_price`` is the floored mean of
    the piece prices recorded on that day's sessions.
    """

    by_date: dict[date, list[PersistedSession]] = defaultdict(list)
    for s in sessions:
        by_date[s.date].append(s)

    out: dict[date, DailyTotal] = {}
    for day in sorted(by_date):
        group = by_date[day]
        gains = [session_gains(s) for s in group]
        out[day] = DailyTotal(
            date=day,
            total_exp_gained=sum(g.exp_gain for g in gains),
            total_meso_gained=sum(g.meso_gain for g in gains),
            total_sojaebi=sum(sojaebi(s.duration_minutes) for s in group),
            session_count=len(group),
            total_pieces=sum(g.piece_gain for g in gains),
            avg_piece_price=sum(s.piece_price for s in group) // len(group),
        )

    _logger.debug("rolled up %d sessions into %d days", sum(map(len, by_date.values())), len(out))
    return out


__all__ = [
    "LEVEL_UP_THRESHOLD",
    "SOJAEBI_MINUTES",
    "compute_gains",
    "daily_totals",
    "has_level_up",
    "progress_index",
    "session_gains",
    "sojaebi",
]
