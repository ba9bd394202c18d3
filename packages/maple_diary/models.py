"""Data models and type aliases for ``maple_diary``.

Values flowing through the library are frozen ``dataclass`` records; they are
constructed by the caller (or by :mod:`maple_diary.ingest` from an export
file) and never mutated. Numeric fields are validated at construction so that
NaN or infinite readings fail loudly instead of leaking into display strings.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Literal, TypeAlias

# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def require_finite(name: str, value: float) -> float:
    """Return ``value`` unchanged, raising ``ValueError`` when NaN/infinite.

    Booleans are rejected explicitly since they are ``int`` subclasses.
    """

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Progress readings and session variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ProgressReading:
    """A single character-progress reading taken at the start or end of a hunt.

    Attributes
    ----------
    level:
        Character level.
    exp_percent:
        Experience percent within the current level. Nominally 0-100.
    meso:
        Meso (currency) on hand.
    sol_erda:
        Sol Erda count, bounded 0-20 in game.
    sol_erda_gauge:
        Sol Erda sub-unit gauge, 0-999 in game.
    sol_erda_piece:
        Sol Erda piece counter.
    """

    level: int = 0
    exp_percent: float = 0.0
    meso: int = 0
    sol_erda: int = 0
    sol_erda_gauge: int = 0
    sol_erda_piece: int = 0

    def __post_init__(self) -> None:
        for name in (
            "level",
            "exp_percent",
            "meso",
            "sol_erda",
            "sol_erda_gauge",
            "sol_erda_piece",
        ):
            require_finite(f"ProgressReading.{name}", getattr(self, name))

    @classmethod
    def zero(cls) -> ProgressReading:
        return cls()

    @property
    def sol_erda_total(self) -> float:
        """Sol Erda count and gauge folded into a single float (gauge / 1000)."""

        return self.sol_erda + self.sol_erda_gauge / 1000


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """A ``(start, end)`` pair of readings. ``end`` may be below ``start``."""

    start: ProgressReading
    end: ProgressReading


@dataclass(frozen=True, slots=True)
class DraftSession:
    """Hunting session as entered in a form, before it is saved."""

    start: ProgressReading
    end: ProgressReading
    duration_minutes: int = 30
    memo: str = ""
    kind: Literal["draft"] = "draft"


@dataclass(frozen=True, slots=True)
class PersistedSession:
    """Hunting session as returned by the persistence layer.

    ``piece_price`` is the Sol Erda piece unit price recorded at the time of
    the hunt; it is used to value ``piece_gain`` in revenue charts.
    """

    id: int
    date: date
    start: ProgressReading
    end: ProgressReading
    session_order: int = 0
    duration_minutes: int = 30
    piece_price: int = 0
    memo: str = ""
    kind: Literal["persisted"] = "persisted"


Session: TypeAlias = DraftSession | PersistedSession
"""Either shape of a hunting session; discriminated by ``kind``."""


def to_progress_snapshot(session: Session) -> ProgressSnapshot:
    """Convert either session variant into the snapshot used for gain math."""

    if session.kind not in ("draft", "persisted"):
        raise ValueError(f"unknown session kind: {session.kind!r}")
    return ProgressSnapshot(start=session.start, end=session.end)


@dataclass(frozen=True, slots=True)
class SessionGain:
    """Deltas between the end and start readings of a session."""

    exp_gain: float
    meso_gain: int
    sol_erda_gain: float
    piece_gain: int


@dataclass(frozen=True, slots=True)
class DailyTotal:
    """Rollup of every hunting session logged on one date."""

    date: date
    total_exp_gained: float = 0.0
    total_meso_gained: int = 0
    total_sojaebi: float = 0.0
    session_count: int = 0
    total_pieces: int = 0
    avg_piece_price: int = 0

    @property
    def piece_value(self) -> int:
        return self.total_pieces * self.avg_piece_price


# ---------------------------------------------------------------------------
# Income sources
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BossClear:
    """A single boss clear. Income is the crystal price split across the party."""

    boss_id: str
    difficulty: str
    cleared_date: date
    crystal_price: int
    party_size: int = 1

    def __post_init__(self) -> None:
        require_finite("BossClear.crystal_price", self.crystal_price)
        if isinstance(self.party_size, bool) or not isinstance(self.party_size, int):
            raise ValueError("BossClear.party_size must be an integer")
        if self.party_size < 1:
            raise ValueError(f"BossClear.party_size must be >= 1, got {self.party_size}")

    @property
    def personal_income(self) -> int:
        return self.crystal_price // self.party_size


@dataclass(frozen=True, slots=True)
class ItemDrop:
    """A valuable item dropped during a hunt, recorded with its sale price."""

    item_name: str
    price: int
    date: date

    def __post_init__(self) -> None:
        require_finite("ItemDrop.price", self.price)
        if self.price < 0:
            raise ValueError(f"ItemDrop.price must be non-negative, got {self.price}")


# ---------------------------------------------------------------------------
# Aggregation records
# ---------------------------------------------------------------------------


class Period(StrEnum):
    """Chart period selected by the user."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True, slots=True)
class PeriodIncomeRecord:
    """Income from the four sources over one period (a day, week or month).

    ``key`` is the day-of-month for daily records, the week number for weekly
    records and the 1-based month for yearly records.
    """

    key: int
    label: str
    hunting: int = 0
    pieces: int = 0
    boss: int = 0
    item_drop: int = 0

    def __post_init__(self) -> None:
        for name in ("hunting", "pieces", "boss", "item_drop"):
            require_finite(f"PeriodIncomeRecord.{name}", getattr(self, name))

    @property
    def total(self) -> int:
        return self.hunting + self.pieces + self.boss + self.item_drop


@dataclass(frozen=True, slots=True)
class WeekBucket:
    """A contiguous run of days inside one month, closed on Saturday or month end."""

    week_number: int
    start_day: int
    end_day: int
    aggregated_income: float = 0

    @property
    def label(self) -> str:
        return f"{self.week_number}주차"

    @property
    def length(self) -> int:
        return self.end_day - self.start_day + 1

    def contains(self, day: int) -> bool:
        return self.start_day <= day <= self.end_day


@dataclass(frozen=True, slots=True)
class RevenueSummary:
    """Per-source sums, grand total and average over a chart window.

    ``average`` divides by ``count_with_data`` (periods whose own total is
    strictly positive), not by the number of periods in the window.
    """

    hunting: int = 0
    pieces: int = 0
    boss: int = 0
    item_drop: int = 0
    grand_total: int = 0
    count_with_data: int = 0
    average: int = 0


@dataclass(frozen=True, slots=True)
class WeeklyBossSummary:
    """Crystal income from weekly bosses over one Thursday reset period."""

    week_start_date: date
    total_crystal_income: int = 0
    boss_count: int = 0
