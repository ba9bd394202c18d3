# ruff: noqa: I001
"""CLI for the ``maple_diary`` package.

This module exposes callable command handlers (``cmd_summary``,
``cmd_calendar``, ``cmd_bosses``, ``cmd_format_meso``) and a Typer-based
console interface. Environment variables (``MAPLE_DIARY_*``) are loaded
from a local ``.env`` using ``python-dotenv`` before delegating to command
logic. Aggregation logic lives in :mod:`maple_diary.api` and the modules it composes.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from typer.models import OptionInfo

from .config import Settings, load_settings
from .logging_setup import configure_logging, get_logger
from .models import Period

_logger = get_logger("maple_diary.cli")

console = Console()

_WEEKDAYS = ("일", "월", "화", "수", "목", "금", "토")

_PERIOD_TITLES = {
    Period.DAILY: "월간",
    Period.WEEKLY: "월간",
    Period.MONTHLY: "월간",
    Period.YEARLY: "연간",
}


# ---- Small module-level helpers used by CLI commands -------------------------


def _error(msg: str) -> int:
    print(f"Error: {msg}", file=sys.stderr)
    return 1


def _load(export_path: str | Path, settings: Settings):
    from .ingest import load_diary_export

    return load_diary_export(export_path, piece_price=settings.piece_price)


def _month0(month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1-12, got {month}")
    return month - 1


# ---- Command handlers ----------------------------------------------------------


def cmd_summary(
    export_path: str | Path,
    *,
    year: int,
    month: int,
    period: str = "monthly",
    week: int | None = None,
) -> int:
    """Print per-source revenue, total and average for a chart window.

    ``month`` is 1-based here (human-facing); the library works zero-indexed.
    Returns ``0`` on success and ``1`` after printing an error to stderr.
    """

    from .api import revenue_report
    from .meso import format_meso, format_meso_short

    try:
        settings = load_settings()
        mode = Period(period)
        data = _load(export_path, settings)
        report = revenue_report(data, year, _month0(month), period=mode, week_number=week)
    except FileNotFoundError:
        return _error(f"File not found: {export_path}")
    except PermissionError:
        return _error(f"Permission denied: {export_path}")
    except ValueError as e:
        return _error(str(e))

    units = settings.units
    summary = report.summary

    series = Table(title=f"{year}년 {month}월 ({mode.value})")
    series.add_column("기간")
    series.add_column("사냥 메소", justify="right")
    series.add_column("솔 에르다 조각", justify="right")
    series.add_column("결정석", justify="right")
    series.add_column("득템", justify="right")
    series.add_column("합계", justify="right")
    for r in report.series:
        series.add_row(
            r.label,
            format_meso_short(r.hunting, units),
            format_meso_short(r.pieces, units),
            format_meso_short(r.boss, units),
            format_meso_short(r.item_drop, units),
            format_meso_short(r.total, units),
        )
    console.print(series)

    if report.selected_week is not None:
        title = f"{report.selected_week.label} 총 수익"
    else:
        title = f"{_PERIOD_TITLES[mode]} 총 수익"

    totals = Table(show_header=False)
    totals.add_column("항목")
    totals.add_column("금액", justify="right")
    totals.add_row("사냥 메소", format_meso(summary.hunting, units))
    totals.add_row("솔 에르다 조각", format_meso(summary.pieces, units))
    totals.add_row("결정석", format_meso(summary.boss, units))
    totals.add_row("득템", format_meso(summary.item_drop, units))
    totals.add_row(title, format_meso(summary.grand_total, units))
    if summary.count_with_data > 0:
        unit_label = ("월평균", "개월") if mode is Period.YEARLY else ("일평균", "일")
        totals.add_row(
            f"{unit_label[0]} ({summary.count_with_data}{unit_label[1]})",
            format_meso(summary.average, units),
        )
    console.print(totals)
    return 0


def cmd_calendar(export_path: str | Path, *, year: int, month: int) -> int:
    """Print the month grid with each day's exp gain and sojaebi."""

    from .api import calendar_cells
    from .experience import format_exp_percent, format_exp_short, load_exp_table

    try:
        settings = load_settings()
        data = _load(export_path, settings)
        cells = calendar_cells(data, year, _month0(month))
        table_data = (
            load_exp_table(settings.exp_table_path) if settings.exp_table_path else None
        )
    except FileNotFoundError as e:
        return _error(f"File not found: {e.filename or export_path}")
    except PermissionError:
        return _error(f"Permission denied: {export_path}")
    except ValueError as e:
        return _error(str(e))

    grid = Table(title=f"{year}년 {month}월", show_lines=True)
    for name in _WEEKDAYS:
        grid.add_column(name, justify="left", min_width=8)

    start_level = {s.date: s.start.level for s in reversed(data.sessions)}

    row: list[str] = []
    for cell in cells:
        if cell is None:
            row.append("")
        else:
            lines = [str(cell.day)]
            if cell.total is not None:
                gain = cell.total.total_exp_gained
                level = start_level.get(cell.total.date)
                if table_data is not None and level is not None:
                    lines.append(format_exp_short(level, gain, table_data, settings.units))
                else:
                    lines.append(format_exp_percent(gain))
                lines.append(f"{cell.total.total_sojaebi:.1f} 소재비")
                if cell.leveled_up:
                    lines.append("레벨 업!")
            row.append("\n".join(lines))
        if len(row) == 7:
            grid.add_row(*row)
            row = []
    if row:
        grid.add_row(*row, *([""] * (7 - len(row))))
    console.print(grid)
    return 0


def cmd_bosses(export_path: str | Path, *, day: str) -> int:
    """Print the weekly-boss clears and crystal income for the reset week holding ``day``."""

    from .bosses import clear_period_start, difficulty_label, get_boss
    from .calendar_periods import format_date
    from .meso import format_meso
    from .revenue import weekly_boss_summary

    try:
        settings = load_settings()
        target = date.fromisoformat(day.strip())
        data = _load(export_path, settings)
        summary = weekly_boss_summary(data.boss_clears, target)
    except FileNotFoundError:
        return _error(f"File not found: {export_path}")
    except PermissionError:
        return _error(f"Permission denied: {export_path}")
    except ValueError as e:
        return _error(str(e))

    units = settings.units
    table = Table(title=f"{format_date(summary.week_start_date)} 주간 보스")
    table.add_column("보스")
    table.add_column("난이도")
    table.add_column("파티", justify="right")
    table.add_column("결정석", justify="right")
    for c in data.boss_clears:
        boss = get_boss(c.boss_id)
        if boss.is_monthly:
            continue
        if clear_period_start(c.boss_id, c.cleared_date) != summary.week_start_date:
            continue
        table.add_row(
            boss.name,
            difficulty_label(c.difficulty),
            str(c.party_size),
            format_meso(c.personal_income, units),
        )
    console.print(table)
    total = format_meso(summary.total_crystal_income, units)
    console.print(f"{summary.boss_count}회 클리어, 합계 {total}")
    return 0


def cmd_format_meso(value: int, *, short: bool = False) -> int:
    from .meso import format_meso, format_meso_short

    try:
        units = load_settings().units
    except ValueError as e:
        return _error(str(e))
    console.print(format_meso_short(value, units) if short else format_meso(value, units))
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Summarize a hunting diary export: calendar, revenue, bosses and meso formatting.",
)


# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults). Typer will inspect this when used as a default value below.
EXPORT_PATH_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--export-path",
    help="Path to a diary export JSON file",
    dir_okay=False,
    file_okay=True,
    exists=False,  # allow non-existent here; the handler will report nice errors
)


def _exit(code: int) -> None:
    if code != 0:
        raise typer.Exit(code)


@app.command("summary")
def summary_cmd(
    export_path: Annotated[Path, EXPORT_PATH_OPTION],
    year: Annotated[int, typer.Option(help="Calendar year, e.g. 2025.")],
    month: Annotated[int, typer.Option(help="Calendar month, 1-12.")],
    period: Annotated[str, typer.Option(help="daily, weekly, monthly or yearly.")] = "monthly",
    week: Annotated[int | None, typer.Option(help="Week number for weekly mode.")] = None,
) -> None:
    """Revenue per source, grand total and average for a month, week or year."""

    _exit(cmd_summary(export_path, year=year, month=month, period=period, week=week))


@app.command("calendar")
def calendar_cmd(
    export_path: Annotated[Path, EXPORT_PATH_OPTION],
    year: Annotated[int, typer.Option(help="Calendar year, e.g. 2025.")],
    month: Annotated[int, typer.Option(help="Calendar month, 1-12.")],
) -> None:
    """Month calendar with exp gain and sojaebi per day."""

    _exit(cmd_calendar(export_path, year=year, month=month))


@app.command("bosses")
def bosses_cmd(
    export_path: Annotated[Path, EXPORT_PATH_OPTION],
    day: Annotated[str, typer.Option("--date", help="Any day of the reset week, YYYY-MM-DD.")],
) -> None:
    """Weekly-boss clears and crystal income for one Thursday reset week."""

    _exit(cmd_bosses(export_path, day=day))


@app.command("format-meso")
def format_meso_cmd(
    value: Annotated[int, typer.Argument(help="Amount in meso.")],
    short: Annotated[bool, typer.Option("--short", help="Compact chart-axis form.")] = False,
) -> None:
    """Render an amount with 억/만 units."""

    _exit(cmd_format_meso(value, short=short))


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()
    _logger.debug("maple-diary CLI starting")


if __name__ == "__main__":  # pragma: no cover
    app()
