"""헤더 행 감지 및 컬럼 역할 매핑

증권사마다 컬럼명이 조금씩 다르므로 영숫자만 남긴 소문자로 정규화한 뒤
동의어 집합으로 매칭한다 ("Cost/Share", "cost share", "COST_SHARE" 모두 동일).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

TICKER_HEADERS = {"symbol", "ticker"}
QUANTITY_HEADERS = {"qty", "qtynumber", "qtyshare", "qtyshares", "quantity"}
COST_HEADERS = {"costshare", "costpershare"}
SALE_PRICE_HEADERS = {"priceshare", "pricepershare", "saleprice", "sellprice"}
PURCHASE_DATE_HEADERS = {"dateadded", "purchasedate", "buydate"}
# 의미가 모호한 날짜 컬럼은 순서대로 모아 두었다가 매수일/매도일로 배정
GENERIC_DATE_HEADERS = {"date", "saledate", "selldate"}


@dataclass(frozen=True)
class HeaderMap:
    """6개 역할 → 0-based 컬럼 인덱스"""

    ticker: int
    cost: int
    quantity: int
    sale_price: int
    purchase_date: int
    sale_date: int

    def required_columns(self):
        """티커를 제외한 필수 필드 (컬럼 인덱스, 라벨) 목록"""
        return [
            (self.cost, "cost/share"),
            (self.quantity, "quantity"),
            (self.sale_price, "sale price"),
            (self.purchase_date, "purchase date"),
            (self.sale_date, "sale date"),
        ]

    @property
    def width(self) -> int:
        return max(self.ticker, self.cost, self.quantity, self.sale_price,
                   self.purchase_date, self.sale_date) + 1


# 헤더가 없는 파일용 고정 위치: ticker,cost,qty,sale,purchase_date,sale_date
POSITIONAL_HEADER = HeaderMap(
    ticker=0, cost=1, quantity=2, sale_price=3, purchase_date=4, sale_date=5,
)


def sanitize_header(cell: str) -> str:
    """ASCII 영숫자만 남기고 소문자화"""
    return "".join(ch for ch in cell if ch.isascii() and ch.isalnum()).lower()


def detect_header(cells: Sequence[str]) -> Optional[HeaderMap]:
    """행이 헤더이면 HeaderMap, 아니면 None

    같은 역할의 동의어가 여러 번 나오면 마지막 컬럼을 사용한다.
    """
    ticker = cost = quantity = sale_price = purchase_date = sale_date = None
    date_columns: List[int] = []

    for idx, raw in enumerate(cells):
        name = sanitize_header(raw)
        if name in TICKER_HEADERS:
            ticker = idx
        elif name in QUANTITY_HEADERS:
            quantity = idx
        elif name in COST_HEADERS:
            cost = idx
        elif name in SALE_PRICE_HEADERS:
            sale_price = idx
        elif name in PURCHASE_DATE_HEADERS:
            purchase_date = idx
        elif name in GENERIC_DATE_HEADERS:
            date_columns.append(idx)

    if purchase_date is None and date_columns:
        purchase_date = date_columns[0]
    if sale_date is None:
        if len(date_columns) > 1:
            sale_date = date_columns[1]
        elif date_columns:
            sale_date = date_columns[0]

    roles = (ticker, cost, quantity, sale_price, purchase_date, sale_date)
    if any(role is None for role in roles):
        return None

    header = HeaderMap(*roles)
    if header.purchase_date == header.sale_date:
        logger.debug(f"날짜 컬럼이 하나뿐이라 매수일/매도일을 같은 컬럼({header.sale_date})으로 사용")
    return header
