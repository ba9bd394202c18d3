"""Meso (currency) formatting in Korean large-number units.

Korean groups large numbers by 10^4 (만) and 10^8 (억) rather than by
thousands, so 455,000,000 meso reads as ``4억 5500만 메소``. Three renderings
are provided:

- :func:`format_meso`: the long form used on summary cards and tooltips.
- :func:`format_meso_short`: a compact form for chart axes and grid cells.
- :func:`format_meso_detailed`: long form that keeps the sub-만 remainder.

Negative amounts are never split into units; they fall through to plain
integer formatting with the sign preserved.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

from .config import DEFAULT_UNITS, LocaleUnits
from .models import require_finite

MAN: int = 10_000
EOK: int = 100_000_000


def _as_int(value: int | float) -> int:
    require_finite("meso value", value)
    return int(value)


def format_meso(value: int | float, units: LocaleUnits = DEFAULT_UNITS) -> str:
    """Render ``value`` with 억/만 units and the currency suffix.

    >>> format_meso(455_000_000)
    '4억 5500만 메소'
    >>> format_meso(9_999)
    '9,999 메소'
    """

    v = _as_int(value)
    if v >= EOK:
        eok = v // EOK
        remainder = (v % EOK) // MAN
        if remainder > 0:
            return f"{eok}{units.eok} {remainder}{units.man} {units.currency}"
        return f"{eok}{units.eok} {units.currency}"
    if v >= MAN:
        return f"{v // MAN}{units.man} {units.currency}"
    return f"{v:,} {units.currency}"


def format_meso_short(value: int | float, units: LocaleUnits = DEFAULT_UNITS) -> str:
    """Compact form without currency suffix: ``4.6억``, ``5500만``, ``9,999``."""

    v = _as_int(value)
    if v >= EOK:
        eok = (Decimal(v) / Decimal(EOK)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{eok}{units.eok}"
    if v >= MAN:
        return f"{v // MAN}{units.man}"
    return f"{v:,}"


def format_meso_detailed(value: int | float, units: LocaleUnits = DEFAULT_UNITS) -> str:
    """Long form that keeps every non-zero component, down to single meso."""

    v = _as_int(value)
    if v < MAN:
        return f"{v:,} {units.currency}"

    eok, rest = divmod(v, EOK)
    man, ones = divmod(rest, MAN)
    parts: list[str] = []
    if eok:
        parts.append(f"{eok}{units.eok}")
    if man:
        parts.append(f"{man}{units.man}")
    if ones:
        parts.append(f"{ones:,}")
    return f"{' '.join(parts)} {units.currency}"


def parse_meso(text: str, units: LocaleUnits = DEFAULT_UNITS) -> int:
    """Parse any of the long forms above back into an integer amount.

    Accepts ``"1억 5000만 메소"``, ``"5500만"``, ``"12,345 메소"`` and similar.
    Raises ``ValueError`` for anything else.
    """

    s = text.strip()
    if s.endswith(units.currency):
        s = s[: -len(units.currency)].strip()
    if not s:
        raise ValueError(f"no amount in {text!r}")

    multipliers = {units.eok: EOK, units.man: MAN}
    unit_re = "|".join(re.escape(u) for u in multipliers)
    token_re = re.compile(rf"^(-?[\d,]+)({unit_re})?$")

    total = 0
    for token in s.split():
        m = token_re.match(token)
        if m is None:
            raise ValueError(f"unrecognized meso token {token!r} in {text!r}")
        number = int(m.group(1).replace(",", ""))
        total += number * multipliers.get(m.group(2) or "", 1)
    return total


__all__ = [
    "EOK",
    "MAN",
    "format_meso",
    "format_meso_detailed",
    "format_meso_short",
    "parse_meso",
]
