"""Load a diary export JSON document into domain records.

The persistence layer of the desktop app can export its data as JSON. This
module validates that document with pydantic and converts it into the frozen
dataclasses from :mod:`maple_diary.models`. It defines no storage of its own.

Expected shape (unknown keys are ignored, missing numbers default to 0)::

    {
      "version": 1,
      "app_settings": {"sol_erda_piece_price": 6500000},
      "hunting_sessions": [
        {"id": 1, "date": "2025-02-03", "session_order": 1,
         "start_level": 270, "end_level": 271,
         "start_exp_percent": 95.5, "end_exp_percent": 3.25,
         "start_meso": 0, "end_meso": 5000000,
         "duration_minutes": 60,
         "start_sol_erda": 3, "end_sol_erda": 4,
         "start_sol_erda_gauge": 500, "end_sol_erda_gauge": 250,
         "start_sol_erda_piece": 10, "end_sol_erda_piece": 14,
         "sol_erda_piece_price": 6500000}
      ],
      "boss_clears": [
        {"boss_id": "lucid", "difficulty": "hard", "cleared_date": "2025-02-03",
         "crystal_price": 66200000, "party_size": 2}
      ],
      "item_drops": [{"item_name": "...", "price": 200000000, "date": "2025-02-03"}]
    }
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .bosses import get_boss
from .config import DEFAULT_PIECE_PRICE
from .logging_setup import get_logger
from .models import BossClear, ItemDrop, PersistedSession, ProgressReading

_logger = get_logger("maple_diary.ingest")

SUPPORTED_VERSIONS: frozenset[int] = frozenset({1})


# ---------------------------------------------------------------------------
# DTOs (on-disk shape)
# ---------------------------------------------------------------------------


class _Dto(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False, str_strip_whitespace=True)


class HuntingSessionRow(_Dto):
    id: int = 0
    date: dt.date
    session_order: int = 0
    start_level: int = 0
    end_level: int = 0
    start_exp_percent: float = 0.0
    end_exp_percent: float = 0.0
    start_meso: int = 0
    end_meso: int = 0
    duration_minutes: int = Field(default=30, ge=0)
    start_sol_erda: int = 0
    end_sol_erda: int = 0
    start_sol_erda_gauge: int = 0
    end_sol_erda_gauge: int = 0
    start_sol_erda_piece: int = 0
    end_sol_erda_piece: int = 0
    sol_erda_piece_price: int | None = None
    memo: str | None = None


class BossClearRow(_Dto):
    boss_id: str
    difficulty: str
    cleared_date: dt.date
    crystal_price: int = Field(ge=0)
    party_size: int = Field(default=1, ge=1)


class ItemDropRow(_Dto):
    item_name: str
    price: int = Field(ge=0)
    date: dt.date


class AppSettingsRow(_Dto):
    sol_erda_piece_price: int | None = Field(default=None, ge=0)


class DiaryExportFile(_Dto):
    """Top-level schema of a diary export file."""

    version: int = 1
    app_settings: AppSettingsRow = Field(default_factory=AppSettingsRow)
    hunting_sessions: list[HuntingSessionRow] = Field(default_factory=list)
    boss_clears: list[BossClearRow] = Field(default_factory=list)
    item_drops: list[ItemDropRow] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Domain view
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DiaryData:
    sessions: tuple[PersistedSession, ...]
    boss_clears: tuple[BossClear, ...]
    item_drops: tuple[ItemDrop, ...]
    piece_price: int


def _to_session(row: HuntingSessionRow, default_piece_price: int) -> PersistedSession:
    start = ProgressReading(
        level=row.start_level,
        exp_percent=row.start_exp_percent,
        meso=row.start_meso,
        sol_erda=row.start_sol_erda,
        sol_erda_gauge=row.start_sol_erda_gauge,
        sol_erda_piece=row.start_sol_erda_piece,
    )
    end = ProgressReading(
        level=row.end_level,
        exp_percent=row.end_exp_percent,
        meso=row.end_meso,
        sol_erda=row.end_sol_erda,
        sol_erda_gauge=row.end_sol_erda_gauge,
        sol_erda_piece=row.end_sol_erda_piece,
    )
    # A zero/missing recorded price means "not captured"; fall back.
    price = row.sol_erda_piece_price or default_piece_price
    return PersistedSession(
        id=row.id,
        date=row.date,
        start=start,
        end=end,
        session_order=row.session_order,
        duration_minutes=row.duration_minutes,
        piece_price=price,
        memo=row.memo or "",
    )


def _check_boss(index: int, row: BossClearRow) -> None:
    try:
        get_boss(row.boss_id).difficulty(row.difficulty)
    except KeyError as exc:
        raise ValueError(f"boss_clears[{index}]: {exc.args[0]}") from exc


def to_diary_data(doc: DiaryExportFile, *, piece_price: int = DEFAULT_PIECE_PRICE) -> DiaryData:
    """Convert a validated export into domain records.

    ``piece_price`` is used when neither the session nor the export's app
    settings carry a Sol Erda piece price. Boss clears must name a boss and
    difficulty from :data:`maple_diary.bosses.BOSSES`; a clear that does not
    raises ``ValueError`` with its row index.
    """

    if doc.version not in SUPPORTED_VERSIONS:
        raise ValueError(f"unsupported export version: {doc.version}")

    for i, row in enumerate(doc.boss_clears):
        _check_boss(i, row)

    default_price = doc.app_settings.sol_erda_piece_price or piece_price
    sessions = tuple(
        sorted(
            (_to_session(r, default_price) for r in doc.hunting_sessions),
            key=lambda s: (s.date, s.session_order),
        )
    )
    clears = tuple(
        BossClear(
            boss_id=r.boss_id,
            difficulty=r.difficulty,
            cleared_date=r.cleared_date,
            crystal_price=r.crystal_price,
            party_size=r.party_size,
        )
        for r in doc.boss_clears
    )
    drops = tuple(
        ItemDrop(item_name=r.item_name, price=r.price, date=r.date) for r in doc.item_drops
    )
    return DiaryData(
        sessions=sessions, boss_clears=clears, item_drops=drops, piece_price=default_price
    )


def load_diary_export(
    path: str | PathLike[str], *, piece_price: int = DEFAULT_PIECE_PRICE
) -> DiaryData:
    """Read, validate and convert the export at ``path``.

    Raises ``ValueError`` (with the path in the message) for malformed JSON or
    schema violations. ``FileNotFoundError``/``PermissionError`` propagate.
    """

    p = Path(path)
    raw = p.read_text(encoding="utf-8")
    try:
        doc = DiaryExportFile.model_validate_json(raw)
    except ValidationError as exc:
        raise ValueError(f"invalid diary export {p}: {exc}") from exc

    data = to_diary_data(doc, piece_price=piece_price)
    _logger.debug(
        "loaded %d sessions, %d boss clears, %d item drops from %s",
        len(data.sessions),
        len(data.boss_clears),
        len(data.item_drops),
        p,
    )
    return data


__all__ = [
    "BossClearRow",
    "DiaryData",
    "DiaryExportFile",
    "HuntingSessionRow",
    "ItemDropRow",
    "load_diary_export",
    "to_diary_data",
]
