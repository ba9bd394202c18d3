from __future__ import annotations

from pathlib import Path

from maple_diary import Period, calendar_cells, load_diary_export, revenue_report
from tests.helpers.diary import write_export


def test_calendar_cells_attach_rollups_and_income(tmp_path: Path):
    data = load_diary_export(write_export(tmp_path))

    cells = calendar_cells(data, 2025, 1)

    # 2025-02-01 is a Saturday: six leading pads.
    assert cells[:6] == [None] * 6
    days = [c for c in cells if c is not None]
    assert len(days) == 28
    third = days[2]
    assert third.date_key == "2025-02-03"
    assert third.total is not None
    assert third.total.total_exp_gained == 7.75
    assert third.total.total_sojaebi == 2.0
    assert third.income == 455_000_000
    assert not third.leveled_up
    assert days[0].total is None
    assert days[0].income == 0


def test_revenue_report_monthly(tmp_path: Path):
    data = load_diary_export(write_export(tmp_path))

    report = revenue_report(data, 2025, 1)

    assert report.period is Period.MONTHLY
    assert len(report.series) == 28
    assert len(report.buckets) == 5
    assert report.selected_week is None
    assert report.summary.grand_total == 469_000_000
    assert report.summary.average == 234_500_000


def test_revenue_report_weekly_with_selection(tmp_path: Path):
    data = load_diary_export(write_export(tmp_path))

    report = revenue_report(data, 2025, 1, period="weekly", week_number=2)

    assert report.selected_week is not None
    assert report.selected_week.label == "2주차"
    assert [r.key for r in report.series] == list(range(2, 9))
    assert report.summary.grand_total == 455_000_000


def test_revenue_report_unknown_week_summarizes_whole_month(tmp_path: Path):
    data = load_diary_export(write_export(tmp_path))

    report = revenue_report(data, 2025, 1, period=Period.WEEKLY, week_number=42)

    assert report.selected_week is None
    assert [r.label for r in report.series][0] == "1주차"
    assert report.summary.grand_total == 469_000_000


def test_revenue_report_yearly(tmp_path: Path):
    data = load_diary_export(write_export(tmp_path))

    report = revenue_report(data, 2025, 1, period=Period.YEARLY)

    assert len(report.series) == 12
    assert report.summary.count_with_data == 1
    assert report.summary.average == 469_000_000
