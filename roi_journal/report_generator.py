#!/usr/bin/env python3
"""
리포트 생성 모듈
포지션 목록/상세/요약 화면을 rich 테이블과 패널로 만듭니다.
"""

import math
from typing import List

from rich.panel import Panel
from rich.table import Table as RichTable
from rich.text import Text

from .models import DATE_FMT, TradeRecord
from .portfolio import Portfolio
from .summary_generator import portfolio_stats, summarize_positions

SPARK_CHARS = "▁▂▃▄▅▆▇█"

HELP_LINES = [
    "ROI Journal",
    "",
    "Portfolio:",
    "  list [--filter TICKER]    show positions with Avg/Total rows",
    "  show N                    position detail (N = Pos column)",
    "  summary                   invested / proceeds / ROI overview",
    "",
    "Edit:",
    "  add --ticker ... --cost ... --qty ... --sale ... --bought ... --sold ...",
    "  edit N [same options]     replace position N",
    "  delete N                  remove position N",
    "",
    "Import:",
    "  import PATH [--dry-run]   broker statement CSV",
    "  fallback columns: ticker,cost,qty,sale,purchase_date,sale_date",
]


def format_currency(value: float) -> str:
    if value < 0:
        return f"-${abs(value):,.2f}"
    return f"${value:,.2f}"


def format_pct(value: float) -> str:
    """0.1234 → +12.34%"""
    if math.isnan(value):
        return "n/a"
    return f"{value * 100:+.2f}%"


def _color_for(value: float) -> str:
    if value > 0:
        return "green"
    if value < 0:
        return "red"
    return "grey50"


def styled_pct(value: float) -> Text:
    return Text(format_pct(value), style=_color_for(value))


def styled_currency(value: float) -> Text:
    return Text(format_currency(value), style="green" if value >= 0 else "red")


def roi_sparkline(records: List[TradeRecord], width: int = 20) -> str:
    """포지션별 ROI% 스파크라인 (최근 width 건)"""
    values = [r.return_pct for r in records if math.isfinite(r.return_pct)][-width:]
    if not values:
        return ""
    lo, hi = min(values), max(values)
    span = hi - lo if hi != lo else 1.0
    last = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[min(last, int((v - lo) / span * last))] for v in values)


def portfolio_header(records: List[TradeRecord]) -> Text:
    total_invested, total_proceeds, roi = portfolio_stats(records)
    text = Text()
    text.append("Invested ", style="grey50")
    text.append(format_currency(total_invested))
    text.append("  Proceeds ", style="grey50")
    text.append(format_currency(total_proceeds))
    text.append("  ROI ", style="grey50")
    text.append_text(styled_pct(roi))
    return text


def positions_table(portfolio: Portfolio) -> RichTable:
    """포지션 테이블 + Avg/Total 요약 행"""
    title = "Positions"
    if portfolio.filter_text:
        title += f" – filter: {portfolio.filter_text}"

    tbl = RichTable(title=title, expand=True, header_style="yellow")
    tbl.add_column("Pos", justify="right", width=4)
    tbl.add_column("Ticker", width=10)
    tbl.add_column("Cost", justify="right")
    tbl.add_column("Qty", justify="right")
    tbl.add_column("Sale", justify="right")
    tbl.add_column("PnL$", justify="right")
    tbl.add_column("ROI%", justify="right")
    tbl.add_column("Days", justify="right")
    tbl.add_column("Bought", width=12)
    tbl.add_column("Sold", width=12)

    filtered = portfolio.filtered()
    for index, r in filtered:
        tbl.add_row(
            f"#{index + 1}",
            r.ticker,
            format_currency(r.cost_per_share),
            f"{r.quantity:.2f}",
            format_currency(r.sale_price),
            styled_currency(r.profit),
            styled_pct(r.return_pct),
            str(r.days_held),
            r.purchase_date.strftime(DATE_FMT),
            r.sale_date.strftime(DATE_FMT),
        )

    summary = summarize_positions([r for _, r in filtered])
    tbl.add_row(
        "", Text("Avg", style="bold magenta"), "", "", "",
        styled_currency(summary.avg_pnl), styled_pct(summary.avg_roi_pct),
        f"{summary.avg_days:.1f}", "", "",
        style="on grey23", end_section=False,
    )
    tbl.add_row(
        "", Text("Total", style="bold cyan"), "", "", "",
        styled_currency(summary.total_pnl), styled_pct(summary.weighted_roi_pct),
        str(summary.total_days), "", "",
        style="on grey23",
    )
    return tbl


def position_detail(record: TradeRecord, index: int) -> Panel:
    """단일 포지션 상세 패널"""
    tbl = RichTable.grid(padding=(0, 2))
    tbl.add_column(style="grey50")
    tbl.add_column()
    tbl.add_row("Ticker", Text(record.ticker, style="yellow"))
    tbl.add_row("ROI", styled_pct(record.return_pct))
    tbl.add_row("Annualized", styled_pct(record.annualized_return))
    tbl.add_row("ROI/day", styled_pct(record.return_per_day))
    tbl.add_row("PnL", styled_currency(record.profit))
    tbl.add_row(
        "Held",
        f"{record.days_held} days  {record.purchase_date.strftime(DATE_FMT)}"
        f" -> {record.sale_date.strftime(DATE_FMT)}",
    )
    tbl.add_row(
        "Invested",
        f"{format_currency(record.invested)}  Proceeds {format_currency(record.proceeds)}"
        f"  Qty {record.quantity:.2f}",
    )
    return Panel(tbl, title=f"Position #{index + 1}", border_style="cyan")


def summary_panel(portfolio: Portfolio) -> Panel:
    records = portfolio.records
    summary = summarize_positions(records)
    tbl = RichTable.grid(padding=(0, 2))
    tbl.add_column(style="grey50")
    tbl.add_column(justify="right")
    tbl.add_row("Positions", str(len(records)))
    tbl.add_row("Total PnL", styled_currency(summary.total_pnl))
    tbl.add_row("Avg PnL", styled_currency(summary.avg_pnl))
    tbl.add_row("Avg ROI", styled_pct(summary.avg_roi_pct))
    tbl.add_row("Weighted ROI", styled_pct(summary.weighted_roi_pct))
    tbl.add_row("Avg days held", f"{summary.avg_days:.1f}")
    tbl.add_row("ROI trend", roi_sparkline(records))
    return Panel(tbl, title=portfolio_header(records), border_style="cyan")


def help_text() -> Panel:
    return Panel("\n".join(HELP_LINES), title="Help", border_style="magenta")
