"""포지션 추가/수정 입력 폼 상태"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import DateOrderError, StatementError
from .models import DATE_FMT, TradeRecord
from .parsers.field_parsers import parse_date_field, parse_decimal_field, parse_ticker

logger = logging.getLogger(__name__)


@dataclass
class FormField:
    label: str
    placeholder: str
    value: str = ""


def _default_fields() -> List[FormField]:
    return [
        FormField("Ticker", "e.g. AAPL"),
        FormField("Cost/share", "e.g. 112.40"),
        FormField("Quantity", "e.g. 50"),
        FormField("Sale price", "e.g. 128.70"),
        FormField("Purchase date", "YYYY-MM-DD"),
        FormField("Sale date", "YYYY-MM-DD"),
    ]


@dataclass
class TradeForm:
    """6개 입력 필드와 마지막 오류 메시지"""

    fields: List[FormField] = field(default_factory=_default_fields)
    error: Optional[str] = None

    @classmethod
    def from_record(cls, record: TradeRecord) -> "TradeForm":
        """수정용으로 기존 포지션 값을 채운 폼"""
        return cls().fill([
            record.ticker,
            f"{record.cost_per_share:.2f}",
            f"{record.quantity:.4f}",
            f"{record.sale_price:.2f}",
            record.purchase_date.strftime(DATE_FMT),
            record.sale_date.strftime(DATE_FMT),
        ])

    @classmethod
    def from_values(cls, values: List[str]) -> "TradeForm":
        return cls().fill(values)

    def fill(self, values: List[Optional[str]]) -> "TradeForm":
        """None 이 아닌 값만 순서대로 필드에 덮어씀"""
        for form_field, value in zip(self.fields, values):
            if value is not None:
                form_field.value = value
        return self

    def build_record(self) -> TradeRecord:
        """입력값 검증 후 TradeRecord 생성

        Raises:
            StatementError: 입력 오류 (메시지는 self.error 에도 저장)
        """
        values = [f.value for f in self.fields]
        try:
            ticker = parse_ticker(values[0])
            cost = parse_decimal_field(values[1], "cost/share")
            quantity = parse_decimal_field(values[2], "quantity")
            sale_price = parse_decimal_field(values[3], "sale price")
            purchase_date = parse_date_field(values[4], "purchase date")
            sale_date = parse_date_field(values[5], "sale date")
            if sale_date < purchase_date:
                raise DateOrderError()
            record = TradeRecord(
                ticker=ticker,
                cost_per_share=cost,
                quantity=quantity,
                sale_price=sale_price,
                purchase_date=purchase_date,
                sale_date=sale_date,
            )
        except StatementError as e:
            self.error = str(e)
            logger.debug(f"폼 검증 실패: {e}")
            raise

        self.error = None
        return record
