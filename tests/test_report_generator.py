"""rich 리포트 렌더링 테스트"""

import io
from datetime import date

from rich.console import Console

from roi_journal.models import TradeRecord
from roi_journal.portfolio import Portfolio
from roi_journal.report_generator import (
    format_currency,
    format_pct,
    help_text,
    portfolio_header,
    position_detail,
    positions_table,
    roi_sparkline,
    summary_panel,
)


def _render(renderable) -> str:
    console = Console(file=io.StringIO(), width=140, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def _portfolio() -> Portfolio:
    return Portfolio([
        TradeRecord("AAPL", 100.0, 10.0, 110.0, date(2024, 1, 1), date(2024, 1, 31)),
        TradeRecord("AMD", 50.0, 4.0, 40.0, date(2024, 2, 1), date(2024, 2, 11)),
        TradeRecord("MSFT", 300.0, 1.0, 330.0, date(2024, 3, 1), date(2024, 3, 2)),
    ])


class TestFormatting:
    """숫자 표시 형식"""

    def test_currency(self):
        assert format_currency(1234.5) == "$1,234.50"
        assert format_currency(-12) == "-$12.00"
        assert format_currency(0) == "$0.00"

    def test_pct(self):
        assert format_pct(0.1234) == "+12.34%"
        assert format_pct(-0.05) == "-5.00%"
        assert format_pct(float("nan")) == "n/a"

    def test_sparkline(self):
        line = roi_sparkline(_portfolio().records)
        assert len(line) == 3
        assert line[1] == "▁"
        assert line[0] == "█" or line[2] == "█"

    def test_sparkline_empty(self):
        assert roi_sparkline([]) == ""


class TestPositionsTable:
    """포지션 테이블"""

    def test_rows_include_avg_and_total(self):
        tbl = positions_table(_portfolio())
        assert tbl.row_count == 5
        output = _render(tbl)
        assert "#1" in output and "#3" in output
        assert "Avg" in output and "Total" in output
        assert "+10.00%" in output

    def test_filter_keeps_position_numbers(self):
        portfolio = _portfolio()
        portfolio.filter_text = "ms"
        tbl = positions_table(portfolio)
        assert tbl.row_count == 3
        output = _render(tbl)
        assert "filter: ms" in output
        assert "#3" in output
        assert "AAPL" not in output

    def test_empty_portfolio(self):
        tbl = positions_table(Portfolio())
        assert tbl.row_count == 2


class TestPanels:
    """상세/요약/도움말 패널"""

    def test_position_detail(self):
        record = _portfolio()[1]
        output = _render(position_detail(record, 1))
        assert "Position #2" in output
        assert "AMD" in output
        assert "-20.00%" in output
        assert "10 days" in output

    def test_summary_panel(self):
        output = _render(summary_panel(_portfolio()))
        assert "Positions" in output
        assert "Weighted ROI" in output

    def test_header(self):
        header = portfolio_header(_portfolio().records)
        assert "Invested $1,500.00" in header.plain
        assert "Proceeds $1,590.00" in header.plain
        assert "+6.00%" in header.plain

    def test_help(self):
        output = _render(help_text())
        assert "import PATH [--dry-run]" in output
