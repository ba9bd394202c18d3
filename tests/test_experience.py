from __future__ import annotations

import json
from pathlib import Path

import pytest

from maple_diary.experience import (
    absolute_exp,
    format_exp_percent,
    format_exp_short,
    format_exp_with_percent,
    load_exp_table,
)

TABLE = {250: 1_000_000, 270: 50_000_000_000_000}


def test_absolute_exp_is_exact_for_two_decimal_percents():
    assert absolute_exp(250, 12.34, TABLE) == 123_400


def test_absolute_exp_unknown_level_is_none():
    assert absolute_exp(999, 12.34, TABLE) is None


def test_absolute_exp_handles_multi_level_gains():
    # 150% of the starting level's requirement.
    assert absolute_exp(250, 150.0, TABLE) == 1_500_000


@pytest.mark.parametrize(
    ("gain", "expected"),
    [(12.346, "+12.35%"), (0.0, "+0.00%"), (-3.5, "-3.50%")],
)
def test_format_exp_percent(gain: float, expected: str):
    assert format_exp_percent(gain) == expected


def test_format_exp_with_percent_known_level():
    assert format_exp_with_percent(250, 12.34, TABLE) == "123,400 경험치 (+12.34%)"


def test_format_exp_with_percent_unknown_level_falls_back_to_percent():
    assert format_exp_with_percent(1, 12.34, TABLE) == "+12.34%"


def test_format_exp_short_compacts_large_values():
    assert format_exp_short(250, 12.34, TABLE) == "12.3만 (+12.3%)"
    # 2% of 50조 is 1조.
    assert format_exp_short(270, 2.0, TABLE) == "1.0조 (+2.0%)"


def test_format_exp_short_small_values_are_grouped():
    assert format_exp_short(250, 0.5, TABLE) == "5,000 (+0.5%)"


def test_load_exp_table(tmp_path: Path):
    p = tmp_path / "levels.json"
    p.write_text(json.dumps({"250": 1_000_000, "251": 1_100_000}), encoding="utf-8")

    assert load_exp_table(p) == {250: 1_000_000, 251: 1_100_000}


@pytest.mark.parametrize(
    "payload",
    ['{"250": 0}', '{"0": 100}', '{"abc": 100}', "[1, 2]", "not json"],
)
def test_load_exp_table_rejects_invalid_tables(tmp_path: Path, payload: str):
    p = tmp_path / "levels.json"
    p.write_text(payload, encoding="utf-8")

    with pytest.raises(ValueError, match="invalid exp table"):
        load_exp_table(p)


def test_load_exp_table_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_exp_table(tmp_path / "missing.json")


def test_format_exp_short_promotes_to_next_unit_after_rounding():
    # 99,999,999 points would otherwise read as 10000.0만.
    assert format_exp_short(250, 99.9999999, {250: 100_000_000}) == "1.0억 (+100.0%)"
    assert format_exp_short(250, 99.99, {250: 100_000_000}) == "9999.0만 (+100.0%)"
