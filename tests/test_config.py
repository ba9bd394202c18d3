from __future__ import annotations

from pathlib import Path

import pytest

from maple_diary.config import DEFAULT_PIECE_PRICE, DEFAULT_UNITS, load_settings


def test_defaults_without_environment():
    s = load_settings()

    assert s.units == DEFAULT_UNITS
    assert s.piece_price == DEFAULT_PIECE_PRICE == 6_500_000
    assert s.exp_table_path is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("MAPLE_DIARY_CURRENCY_NAME", " meso ")
    monkeypatch.setenv("MAPLE_DIARY_UNIT_MAN", "W")
    monkeypatch.setenv("MAPLE_DIARY_UNIT_EOK", "E")
    monkeypatch.setenv("MAPLE_DIARY_PIECE_PRICE", "7,000,000")
    monkeypatch.setenv("MAPLE_DIARY_EXP_TABLE", str(tmp_path / "levels.json"))

    s = load_settings()

    assert (s.units.currency, s.units.man, s.units.eok) == ("meso", "W", "E")
    assert s.piece_price == 7_000_000
    assert s.exp_table_path == tmp_path / "levels.json"


def test_blank_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MAPLE_DIARY_CURRENCY_NAME", "   ")
    monkeypatch.setenv("MAPLE_DIARY_PIECE_PRICE", "")

    s = load_settings()

    assert s.units.currency == "메소"
    assert s.piece_price == DEFAULT_PIECE_PRICE


@pytest.mark.parametrize("raw", ["abc", "-1"])
def test_bad_piece_price_names_the_variable(monkeypatch: pytest.MonkeyPatch, raw: str):
    monkeypatch.setenv("MAPLE_DIARY_PIECE_PRICE", raw)

    with pytest.raises(ValueError, match="MAPLE_DIARY_PIECE_PRICE"):
        load_settings()
