"""TradeRecord 데이터 모델"""

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict

from .errors import DateOrderError, EmptyTickerError, InvalidNumberError

DATE_FMT = "%Y-%m-%d"


@dataclass(frozen=True)
class TradeRecord:
    """청산 완료된 매수→매도 1건 (수정 시 통째로 교체)"""

    ticker: str  # 대문자 티커
    cost_per_share: float  # 매수 단가
    quantity: float  # 수량 (소수 가능)
    sale_price: float  # 매도 단가
    purchase_date: date  # 매수일
    sale_date: date  # 매도일 (>= 매수일)

    def __post_init__(self):
        ticker = self.ticker.strip()
        if not ticker:
            raise EmptyTickerError()
        object.__setattr__(self, "ticker", ticker.upper())
        # 단가는 0 이상
        if self.cost_per_share < 0:
            raise InvalidNumberError("cost/share")
        if self.sale_price < 0:
            raise InvalidNumberError("sale price")
        if self.sale_date < self.purchase_date:
            raise DateOrderError()

    @property
    def invested(self) -> float:
        return self.cost_per_share * self.quantity

    @property
    def proceeds(self) -> float:
        return self.sale_price * self.quantity

    @property
    def profit(self) -> float:
        return self.proceeds - self.invested

    @property
    def return_pct(self) -> float:
        """수익률 (소수). 투자금이 0이면 inf/nan 이므로 호출측에서 확인"""
        invested = self.invested
        if invested == 0:
            profit = self.profit
            if profit == 0:
                return float("nan")
            return float("inf") if profit > 0 else float("-inf")
        return self.profit / invested

    @property
    def days_held(self) -> int:
        """보유일수, 당일 매매도 최소 1일"""
        return max(1, (self.sale_date - self.purchase_date).days)

    @property
    def return_per_day(self) -> float:
        return self.return_pct / self.days_held

    @property
    def annualized_return(self) -> float:
        """연환산 수익률. 배수가 0 이하이면 -1.0 (전액 손실)"""
        if self.invested <= 0 or self.proceeds <= 0:
            return -1.0
        multiple = self.proceeds / self.invested
        try:
            return multiple ** (365 / self.days_held) - 1
        except OverflowError:
            return float("inf")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["purchase_date"] = self.purchase_date.strftime(DATE_FMT)
        data["sale_date"] = self.sale_date.strftime(DATE_FMT)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TradeRecord":
        """저장 파일(JSON) 한 항목에서 복원"""
        return cls(
            ticker=str(data["ticker"]),
            cost_per_share=float(data["cost_per_share"]),
            quantity=float(data["quantity"]),
            sale_price=float(data["sale_price"]),
            purchase_date=datetime.strptime(str(data["purchase_date"]), DATE_FMT).date(),
            sale_date=datetime.strptime(str(data["sale_date"]), DATE_FMT).date(),
        )
