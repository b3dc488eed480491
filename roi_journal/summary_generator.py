"""포트폴리오 요약 계산 모듈

전체 투자금/회수금/수익률과 선택된 포지션들의 평균·합계 지표를 계산한다.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .models import TradeRecord

EPSILON = 1e-12


@dataclass
class PositionSummary:
    """포지션 목록 요약 (빈 목록이면 모두 0)"""

    total_pnl: float = 0.0  # 실현손익 합계
    avg_pnl: float = 0.0  # 건당 평균 손익
    avg_roi_pct: float = 0.0  # 단순 평균 수익률
    weighted_roi_pct: float = 0.0  # 투자금 가중 수익률
    total_days: int = 0  # 보유일수 합계
    avg_days: float = 0.0  # 평균 보유일수


def _weighted_roi(total_invested: float, total_proceeds: float) -> float:
    if abs(total_invested) < EPSILON:
        return 0.0
    return (total_proceeds - total_invested) / total_invested


def portfolio_stats(records: Iterable[TradeRecord]) -> Tuple[float, float, float]:
    """(총 투자금, 총 회수금, 수익률)"""
    records = list(records)
    total_invested = sum(r.invested for r in records)
    total_proceeds = sum(r.proceeds for r in records)
    return total_invested, total_proceeds, _weighted_roi(total_invested, total_proceeds)


def summarize_positions(records: List[TradeRecord]) -> PositionSummary:
    count = len(records)
    if count == 0:
        return PositionSummary()

    total_pnl = sum(r.profit for r in records)
    total_roi = sum(r.return_pct for r in records)
    total_days = sum(r.days_held for r in records)
    total_invested, total_proceeds, weighted = portfolio_stats(records)

    return PositionSummary(
        total_pnl=total_pnl,
        avg_pnl=total_pnl / count,
        avg_roi_pct=total_roi / count,
        weighted_roi_pct=weighted,
        total_days=total_days,
        avg_days=total_days / count,
    )
