from __future__ import annotations

from datetime import date

import pytest

from maple_diary.bosses import (
    BOSSES,
    DIFFICULTY_ORDER,
    BossSetting,
    clear_period_start,
    crystal_price,
    difficulty_label,
    get_boss,
    monthly_bosses,
    personal_income,
    sort_boss_settings,
    weekly_bosses,
)


def test_catalogue_ids_are_unique():
    ids = [b.id for b in BOSSES]
    assert len(ids) == len(set(ids))


def test_catalogue_difficulties_are_known_and_priced():
    for boss in BOSSES:
        assert boss.difficulties
        for d in boss.difficulties:
            assert d.difficulty in DIFFICULTY_ORDER
            assert d.price > 0


def test_black_mage_is_the_only_monthly_boss():
    assert [b.id for b in monthly_bosses()] == ["blackmage"]
    assert len(weekly_bosses()) == len(BOSSES) - 1


def test_crystal_price_lookup():
    assert crystal_price("lucid", "hard") == 66_200_000
    assert crystal_price("cygnus", "easy") == 4_550_000


def test_unknown_boss_or_difficulty_raises_key_error():
    with pytest.raises(KeyError):
        get_boss("nobody")
    with pytest.raises(KeyError):
        crystal_price("cygnus", "extreme")
    with pytest.raises(KeyError):
        difficulty_label("ultra")


def test_personal_income_floors():
    assert personal_income(66_200_000, 3) == 22_066_666
    with pytest.raises(ValueError):
        personal_income(1_000, 0)


def test_difficulty_label():
    assert difficulty_label("chaos") == "카오스"


def test_clear_period_start_uses_reset_kind():
    # 2025-02-05 is a Wednesday.
    assert clear_period_start("lucid", date(2025, 2, 5)) == date(2025, 1, 30)
    assert clear_period_start("blackmage", date(2025, 2, 5)) == date(2025, 2, 1)


def test_sort_boss_settings_monthly_first_then_income():
    settings = [
        BossSetting("cygnus", "easy"),
        BossSetting("lucid", "hard", party_size=2),
        BossSetting("blackmage", "hard", party_size=6),
        BossSetting("lucid", "normal"),
        BossSetting("missing", "hard"),
    ]

    ordered = sort_boss_settings(settings)

    assert [(s.boss_id, s.difficulty) for s in ordered] == [
        ("blackmage", "hard"),
        ("lucid", "normal"),
        ("lucid", "hard"),
        ("cygnus", "easy"),
        ("missing", "hard"),
    ]
