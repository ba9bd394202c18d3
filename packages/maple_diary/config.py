"""Environment-driven settings for ``maple_diary``.

All knobs are plain environment variables (optionally sourced from a ``.env``
file by the CLI through ``python-dotenv``). Library callers that do not want
environment coupling can construct :class:`LocaleUnits` / :class:`Settings`
directly and pass them in.

Variables
---------
- ``MAPLE_DIARY_CURRENCY_NAME``: currency suffix (default ``메소``).
- ``MAPLE_DIARY_UNIT_MAN``: name of the 10,000 unit (default ``만``).
- ``MAPLE_DIARY_UNIT_EOK``: name of the 100,000,000 unit (default ``억``).
- ``MAPLE_DIARY_PIECE_PRICE``: fallback Sol Erda piece price (default
  6,500,000 meso).
- ``MAPLE_DIARY_EXP_TABLE``: optional path to a level -> exp JSON table.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PIECE_PRICE: int = 6_500_000


@dataclass(frozen=True, slots=True)
class LocaleUnits:
    """Names used when rendering large meso/exp magnitudes."""

    currency: str = "메소"
    man: str = "만"
    eok: str = "억"
    jo: str = "조"
    exp: str = "경험치"


DEFAULT_UNITS = LocaleUnits()


@dataclass(frozen=True, slots=True)
class Settings:
    units: LocaleUnits = field(default_factory=LocaleUnits)
    piece_price: int = DEFAULT_PIECE_PRICE
    exp_table_path: Path | None = None


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip().replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_settings() -> Settings:
    """Read :class:`Settings` from the current environment."""

    units = LocaleUnits(
        currency=_env_str("MAPLE_DIARY_CURRENCY_NAME", DEFAULT_UNITS.currency),
        man=_env_str("MAPLE_DIARY_UNIT_MAN", DEFAULT_UNITS.man),
        eok=_env_str("MAPLE_DIARY_UNIT_EOK", DEFAULT_UNITS.eok),
    )
    piece_price = _env_int("MAPLE_DIARY_PIECE_PRICE", DEFAULT_PIECE_PRICE)
    if piece_price < 0:
        raise ValueError(f"MAPLE_DIARY_PIECE_PRICE must be non-negative, got {piece_price}")
    table = os.getenv("MAPLE_DIARY_EXP_TABLE")
    exp_table_path = Path(table).expanduser() if table and table.strip() else None
    return Settings(units=units, piece_price=piece_price, exp_table_path=exp_table_path)


__all__ = ["DEFAULT_PIECE_PRICE", "DEFAULT_UNITS", "LocaleUnits", "Settings", "load_settings"]
