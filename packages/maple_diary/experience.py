"""Experience gain formatting against a level -> required-exp table.

Gains arrive as percent-equivalents from :func:`maple_diary.gains.compute_gains`
(whole levels folded in as multiples of 100). When the starting level is in
the table, the percent is converted into absolute experience points using
that level's requirement; otherwise only the percent is shown.

The table itself is external data. :func:`load_exp_table` reads it from a
JSON object mapping level (as a string key) to required experience.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal
from os import PathLike
from typing import TypeAlias
from pathlib import Path

from pydantic import RootModel, ValidationError, field_validator

from .config import DEFAULT_UNITS, LocaleUnits
from .logging_setup import get_logger
from .meso import EOK, MAN
from .models import require_finite

JO: int = 1_000_000_000_000

ExpTable: TypeAlias = Mapping[int, int]
"""Level -> total experience required to clear that level."""

_logger = get_logger("maple_diary.experience")


class ExpTableFile(RootModel[dict[int, int]]):
    """On-disk shape of the level table: ``{"260": 1234567890, ...}``."""

    @field_validator("root")
    @classmethod
    def _positive_requirements(cls, v: dict[int, int]) -> dict[int, int]:
        for level, required in v.items():
            if level < 1:
                raise ValueError(f"level must be >= 1, got {level}")
            if required <= 0:
                raise ValueError(f"required exp for level {level} must be positive")
        return v


def load_exp_table(path: str | PathLike[str]) -> dict[int, int]:
    """Load and validate a level table from ``path``.

    Raises ``ValueError`` when the file is not a valid table;
    ``FileNotFoundError`` propagates unchanged.
    """

    p = Path(path)
    raw = p.read_text(encoding="utf-8")
    try:
        table = ExpTableFile.model_validate_json(raw).root
    except ValidationError as exc:
        raise ValueError(f"invalid exp table {p}: {exc}") from exc
    _logger.debug("loaded exp table with %d levels from %s", len(table), p)
    return dict(table)


def absolute_exp(level: int, exp_gain: float, table: ExpTable) -> int | None:
    """Convert a percent-equivalent gain into experience points, or ``None``.

    Decimal arithmetic keeps ``12.34%`` of 1,000,000 at exactly 123,400.
    """

    require_finite("exp_gain", exp_gain)
    required = table.get(level)
    if required is None:
        return None
    value = Decimal(repr(float(exp_gain))) * Decimal(required) / Decimal(100)
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def format_exp_percent(exp_gain: float, *, digits: int = 2) -> str:
    """Signed percent, e.g. ``+12.34%``."""

    require_finite("exp_gain", exp_gain)
    return f"{exp_gain:+.{digits}f}%"


def _compact(value: int, units: LocaleUnits) -> str:
    scales = ((JO, units.jo), (EOK, units.eok), (MAN, units.man))
    for i, (size, name) in enumerate(scales):
        if abs(value) < size:
            continue
        q = (Decimal(value) / Decimal(size)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        # 9999.95만 rounds to 10000.0만; show it as 1.0억 instead.
        if i > 0 and abs(q) >= 10_000:
            size, name = scales[i - 1]
            q = (Decimal(value) / Decimal(size)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{q}{name}"
    return f"{value:,}"


def format_exp_with_percent(
    level: int,
    exp_gain: float,
    table: ExpTable,
    units: LocaleUnits = DEFAULT_UNITS,
) -> str:
    """``"123,400 경험치 (+12.34%)"``; percent only when ``level`` is unknown."""

    percent = format_exp_percent(exp_gain)
    points = absolute_exp(level, exp_gain, table)
    if points is None:
        return percent
    return f"{points:,} {units.exp} ({percent})"


def format_exp_short(
    level: int,
    exp_gain: float,
    table: ExpTable,
    units: LocaleUnits = DEFAULT_UNITS,
) -> str:
    """``"12.3만 (+12.3%)"``; percent only when ``level`` is unknown."""

    percent = format_exp_percent(exp_gain, digits=1)
    points = absolute_exp(level, exp_gain, table)
    if points is None:
        return percent
    return f"{_compact(points, units)} ({percent})"


__all__ = [
    "JO",
    "ExpTable",
    "ExpTableFile",
    "absolute_exp",
    "format_exp_percent",
    "format_exp_short",
    "format_exp_with_percent",
    "load_exp_table",
]
