"""
청산 포지션 ROI 저널 모듈
"""

from .errors import StatementError, StoreError
from .models import TradeRecord
from .parsers import StatementParser, parse_statement
from .portfolio import Portfolio
from .portfolio_store import PortfolioStore
from .summary_generator import PositionSummary, portfolio_stats, summarize_positions
from .trade_form import TradeForm

__all__ = [
    'StatementError',
    'StoreError',
    'TradeRecord',
    'StatementParser',
    'parse_statement',
    'Portfolio',
    'PortfolioStore',
    'PositionSummary',
    'portfolio_stats',
    'summarize_positions',
    'TradeForm',
]
