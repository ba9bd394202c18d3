from __future__ import annotations

import math
from datetime import date

import pytest

from maple_diary.gains import (
    compute_gains,
    daily_totals,
    has_level_up,
    progress_index,
    session_gains,
    sojaebi,
)
from maple_diary.models import DraftSession, ProgressReading, to_progress_snapshot
from tests.helpers.diary import make_session


def test_gain_within_one_level():
    start = ProgressReading(level=250, exp_percent=10.0, meso=1_000)
    end = ProgressReading(level=250, exp_percent=22.5, meso=6_000)

    g = compute_gains(start, end)

    assert g.exp_gain == pytest.approx(12.5)
    assert g.meso_gain == 5_000


def test_level_up_rollover_counts_full_levels():
    start = ProgressReading(level=270, exp_percent=95.5)
    end = ProgressReading(level=272, exp_percent=3.25)

    g = compute_gains(start, end)

    # 200 points for two levels, minus the 92.25 that was left in the first.
    assert g.exp_gain == pytest.approx(107.75)


def test_negative_deltas_pass_through_unclamped():
    start = ProgressReading(level=200, exp_percent=50.0, meso=10_000_000, sol_erda_piece=5)
    end = ProgressReading(level=200, exp_percent=40.0, meso=2_000_000, sol_erda_piece=3)

    g = compute_gains(start, end)

    assert g.exp_gain == pytest.approx(-10.0)
    assert g.meso_gain == -8_000_000
    assert g.piece_gain == -2


def test_sol_erda_gain_folds_gauge_as_thousandths():
    start = ProgressReading(sol_erda=3, sol_erda_gauge=500)
    end = ProgressReading(sol_erda=4, sol_erda_gauge=250)

    assert compute_gains(start, end).sol_erda_gain == pytest.approx(0.75)


def test_zero_readings_produce_zero_gains():
    g = compute_gains(ProgressReading.zero(), ProgressReading.zero())
    assert (g.exp_gain, g.meso_gain, g.sol_erda_gain, g.piece_gain) == (0, 0, 0, 0)


def test_compute_gains_is_deterministic():
    start = ProgressReading(level=260, exp_percent=33.333, meso=123_456_789)
    end = ProgressReading(level=261, exp_percent=1.111, meso=987_654_321)

    results = {compute_gains(start, end) for _ in range(20)}

    assert len(results) == 1


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_readings_are_rejected(bad: float):
    with pytest.raises(ValueError, match="finite"):
        ProgressReading(level=250, exp_percent=bad)


def test_draft_and_persisted_sessions_share_gain_math():
    start = ProgressReading(level=250, exp_percent=10.0, meso=0)
    end = ProgressReading(level=251, exp_percent=5.0, meso=1_000)
    draft = DraftSession(start=start, end=end)
    persisted = make_session(date(2025, 2, 3), start=start, end=end)

    assert to_progress_snapshot(draft) == to_progress_snapshot(persisted)
    assert session_gains(draft) == session_gains(persisted)


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [(0, 0.0), (30, 1.0), (45, 1.5), (120, 4.0)],
)
def test_sojaebi_is_half_hour_units(minutes: int, expected: float):
    assert sojaebi(minutes) == pytest.approx(expected)


def test_sojaebi_rejects_negative_duration():
    with pytest.raises(ValueError):
        sojaebi(-1)


@pytest.mark.parametrize(
    ("total", "expected"),
    [(99.99, False), (100.0, True), (250.0, True), (-5.0, False)],
)
def test_level_up_threshold(total: float, expected: bool):
    assert has_level_up(total) is expected


def test_progress_index():
    assert progress_index(270, 12.5) == pytest.approx(27_012.5)


def test_daily_totals_groups_and_sums_by_date():
    d1 = date(2025, 2, 3)
    d2 = date(2025, 2, 4)
    sessions = [
        make_session(
            d2,
            start=ProgressReading(level=271, exp_percent=0.0),
            end=ProgressReading(level=271, exp_percent=2.0),
        ),
        make_session(
            d1,
            order=1,
            start=ProgressReading(level=270, exp_percent=60.0, meso=0, sol_erda_piece=0),
            end=ProgressReading(level=270, exp_percent=90.0, meso=3_000_000, sol_erda_piece=2),
            duration=60,
            piece_price=6_000_000,
        ),
        make_session(
            d1,
            order=2,
            start=ProgressReading(level=270, exp_percent=90.0, meso=3_000_000, sol_erda_piece=2),
            end=ProgressReading(level=271, exp_percent=10.0, meso=5_000_000, sol_erda_piece=3),
            duration=30,
            piece_price=7_000_001,
        ),
    ]

    totals = daily_totals(sessions)

    assert list(totals) == [d1, d2]
    first = totals[d1]
    assert first.session_count == 2
    assert first.total_exp_gained == pytest.approx(50.0)
    assert first.total_meso_gained == 5_000_000
    assert first.total_sojaebi == pytest.approx(3.0)
    assert first.total_pieces == 3
    # Floored mean of 6,000,000 and 7,000,001.
    assert first.avg_piece_price == 6_500_000
    assert first.piece_value == 19_500_000
    assert totals[d2].session_count == 1


def test_daily_totals_of_nothing_is_empty():
    assert daily_totals([]) == {}
