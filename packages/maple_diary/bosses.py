"""Boss catalogue with crystal prices (February 2025 prices).

The catalogue is static reference data. Each boss lists the difficulties it
can be cleared on, with the crystal sale price and the maximum party size.
Income from a clear is the crystal price split evenly across the party and
floored to whole meso.

Monthly bosses reset on the 1st; every other boss resets weekly on Thursday
(see :mod:`maple_diary.calendar_periods`).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from .calendar_periods import month_start_date, week_start_date

DIFFICULTY_ORDER: tuple[str, ...] = ("easy", "normal", "hard", "chaos", "extreme")

DIFFICULTY_LABELS: dict[str, str] = {
    "easy": "이지",
    "normal": "노멀",
    "hard": "하드",
    "chaos": "카오스",
    "extreme": "익스트림",
}


@dataclass(frozen=True, slots=True)
class BossDifficulty:
    difficulty: str
    price: int
    party_size: int = 6


@dataclass(frozen=True, slots=True)
class Boss:
    id: str
    name: str
    difficulties: tuple[BossDifficulty, ...]
    is_monthly: bool = False

    def difficulty(self, difficulty: str) -> BossDifficulty:
        for d in self.difficulties:
            if d.difficulty == difficulty:
                return d
        raise KeyError(f"boss {self.id!r} has no {difficulty!r} difficulty")


@dataclass(frozen=True, slots=True)
class BossSetting:
    """A boss the character clears regularly, with the party size used."""

    boss_id: str
    difficulty: str
    party_size: int = 1
    enabled: bool = True


def _boss(id_: str, name: str, *prices: tuple[str, int], monthly: bool = False) -> Boss:
    return Boss(
        id=id_,
        name=name,
        difficulties=tuple(BossDifficulty(d, p) for d, p in prices),
        is_monthly=monthly,
    )


# Monthly boss first, then weekly bosses by lowest-difficulty price, descending.
BOSSES: tuple[Boss, ...] = (
    _boss("blackmage", "검은 마법사", ("hard", 700_000_000), ("extreme", 9_200_000_000), monthly=True),
    _boss("jupiter", "유피테르", ("normal", 1_700_000_000), ("hard", 5_100_000_000)),
    _boss("baldrix", "발드릭스", ("normal", 1_440_000_000), ("hard", 3_240_000_000)),
    _boss("limbo", "림보", ("normal", 1_080_000_000), ("hard", 2_510_000_000)),
    _boss("ominous_star", "찬란한 흉성", ("normal", 658_000_000), ("hard", 2_819_000_000)),
    _boss(
        "kaling",
        "카링",
        ("easy", 419_000_000),
        ("normal", 714_000_000),
        ("hard", 1_830_000_000),
        ("extreme", 5_670_000_000),
    ),
    _boss(
        "chosen_one",
        "최초의 대적자",
        ("easy", 324_000_000),
        ("normal", 589_000_000),
        ("hard", 1_510_000_000),
        ("extreme", 4_960_000_000),
    ),
    _boss(
        "kalos",
        "감시자 칼로스",
        ("easy", 311_000_000),
        ("normal", 561_000_000),
        ("chaos", 1_340_000_000),
        ("extreme", 4_320_000_000),
    ),
    _boss("seren", "선택받은 세렌", ("normal", 266_000_000), ("hard", 396_000_000), ("extreme", 3_150_000_000)),
    _boss("verus_hilla", "진 힐라", ("normal", 74_900_000), ("hard", 112_000_000)),
    _boss("dunkel", "듄켈", ("normal", 50_000_000), ("hard", 99_400_000)),
    _boss("gloom", "더스크", ("normal", 46_300_000), ("chaos", 73_500_000)),
    _boss("will", "윌", ("easy", 34_000_000), ("normal", 43_300_000), ("hard", 81_200_000)),
    _boss("lucid", "루시드", ("easy", 31_400_000), ("normal", 37_500_000), ("hard", 66_200_000)),
    _boss("guardian_angel_slime", "가디언 엔젤 슬라임", ("normal", 26_800_000), ("chaos", 79_100_000)),
    _boss("damien", "데미안", ("normal", 18_400_000), ("hard", 51_500_000)),
    _boss("lotus", "스우", ("normal", 17_600_000), ("hard", 54_200_000), ("extreme", 604_000_000)),
    _boss("papulatus", "파풀라투스", ("chaos", 13_800_000)),
    _boss("vellum", "벨룸", ("chaos", 9_280_000)),
    _boss("magnus", "매그너스", ("hard", 8_560_000)),
    _boss("pierre", "피에르", ("chaos", 8_170_000)),
    _boss("vonbon", "반반", ("chaos", 8_150_000)),
    _boss("bloodyqueen", "블러디퀸", ("chaos", 8_140_000)),
    _boss("zakum", "자쿰", ("chaos", 8_080_000)),
    _boss("pinkbean", "핑크빈", ("chaos", 6_580_000)),
    _boss("hilla", "힐라", ("hard", 5_750_000)),
    _boss("cygnus", "시그너스", ("easy", 4_550_000), ("normal", 7_500_000)),
)

_BY_ID: dict[str, Boss] = {b.id: b for b in BOSSES}


def get_boss(boss_id: str) -> Boss:
    try:
        return _BY_ID[boss_id]
    except KeyError:
        raise KeyError(f"unknown boss id: {boss_id!r}") from None


def weekly_bosses() -> list[Boss]:
    return [b for b in BOSSES if not b.is_monthly]


def monthly_bosses() -> list[Boss]:
    return [b for b in BOSSES if b.is_monthly]


def crystal_price(boss_id: str, difficulty: str) -> int:
    return get_boss(boss_id).difficulty(difficulty).price


def personal_income(price: int, party_size: int) -> int:
    """Each party member's floored share of a crystal."""

    if party_size < 1:
        raise ValueError(f"party_size must be >= 1, got {party_size}")
    return price // party_size


def difficulty_label(difficulty: str) -> str:
    try:
        return DIFFICULTY_LABELS[difficulty]
    except KeyError:
        raise KeyError(f"unknown difficulty: {difficulty!r}") from None


def clear_period_start(boss_id: str, cleared_date: date) -> date:
    """Start of the reset period a clear counts toward."""

    if get_boss(boss_id).is_monthly:
        return month_start_date(cleared_date)
    return week_start_date(cleared_date)


def sort_boss_settings(settings: Iterable[BossSetting]) -> list[BossSetting]:
    """Monthly bosses first, then by personal income, highest first.

    Settings that reference a boss or difficulty missing from the catalogue
    sort last with zero income.
    """

    def key(s: BossSetting) -> tuple[int, int]:
        boss = _BY_ID.get(s.boss_id)
        monthly = bool(boss and boss.is_monthly)
        income = 0
        if boss is not None:
            for d in boss.difficulties:
                if d.difficulty == s.difficulty:
                    income = personal_income(d.price, s.party_size)
                    break
        return (0 if monthly else 1, -income)

    return sorted(settings, key=key)


__all__ = [
    "BOSSES",
    "DIFFICULTY_LABELS",
    "DIFFICULTY_ORDER",
    "Boss",
    "BossDifficulty",
    "BossSetting",
    "clear_period_start",
    "crystal_price",
    "difficulty_label",
    "get_boss",
    "monthly_bosses",
    "personal_income",
    "sort_boss_settings",
    "weekly_bosses",
]
