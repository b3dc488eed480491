"""TradeRecord 계산 테스트"""

import math
from datetime import date

import pytest

from roi_journal.errors import DateOrderError, EmptyTickerError, InvalidNumberError
from roi_journal.models import TradeRecord


def make_record(**overrides) -> TradeRecord:
    values = dict(
        ticker="aapl",
        cost_per_share=100.0,
        quantity=10.0,
        sale_price=110.0,
        purchase_date=date(2024, 1, 1),
        sale_date=date(2024, 1, 31),
    )
    values.update(overrides)
    return TradeRecord(**values)


class TestTradeRecord:

    def test_ticker_normalized(self):
        assert make_record(ticker="  msft ").ticker == "MSFT"

    def test_empty_ticker(self):
        with pytest.raises(EmptyTickerError):
            make_record(ticker="  ")

    def test_sale_before_purchase(self):
        with pytest.raises(DateOrderError):
            make_record(purchase_date=date(2024, 2, 1), sale_date=date(2024, 1, 1))

    @pytest.mark.parametrize("field_name,label", [
        ("cost_per_share", "cost/share"),
        ("sale_price", "sale price"),
    ])
    def test_negative_price_rejected(self, field_name, label):
        with pytest.raises(InvalidNumberError) as exc:
            make_record(**{field_name: -0.01})
        assert str(exc.value) == f"Invalid {label}"

    def test_zero_price_allowed(self):
        assert make_record(sale_price=0.0).proceeds == 0.0

    def test_derived_values(self):
        r = make_record()
        assert r.invested == 1000.0
        assert r.proceeds == 1100.0
        assert r.profit == 100.0
        assert r.return_pct == pytest.approx(0.1)
        assert r.days_held == 30
        assert r.return_per_day == pytest.approx(0.1 / 30)

    def test_same_day_counts_as_one(self):
        r = make_record(sale_date=date(2024, 1, 1))
        assert r.days_held == 1
        assert r.return_per_day == pytest.approx(r.return_pct)

    def test_annualized_one_year(self):
        r = make_record(purchase_date=date(2023, 1, 1), sale_date=date(2024, 1, 1))
        # 2023년은 365일
        assert r.annualized_return == pytest.approx(0.1)

    def test_annualized_total_loss(self):
        assert make_record(sale_price=0.0).annualized_return == -1.0

    def test_annualized_overflow(self):
        r = make_record(cost_per_share=0.01, sale_price=1000.0, sale_date=date(2024, 1, 1))
        assert r.annualized_return == float("inf")

    def test_zero_investment(self):
        assert math.isinf(make_record(cost_per_share=0.0).return_pct)
        assert math.isnan(make_record(cost_per_share=0.0, sale_price=0.0).return_pct)
        assert make_record(cost_per_share=0.0).annualized_return == -1.0

    def test_loss(self):
        r = make_record(sale_price=90.0)
        assert r.profit == -100.0
        assert r.return_pct == pytest.approx(-0.1)


class TestSerialization:

    def test_to_dict_uses_iso_dates(self):
        data = make_record().to_dict()
        assert data == {
            "ticker": "AAPL",
            "cost_per_share": 100.0,
            "quantity": 10.0,
            "sale_price": 110.0,
            "purchase_date": "2024-01-01",
            "sale_date": "2024-01-31",
        }

    def test_from_dict_accepts_string_numbers(self):
        r = TradeRecord.from_dict({
            "ticker": "nvda",
            "cost_per_share": "12.5",
            "quantity": 4,
            "sale_price": "15",
            "purchase_date": "2024-03-01",
            "sale_date": "2024-03-02",
        })
        assert r.ticker == "NVDA"
        assert r.cost_per_share == 12.5
        assert r.sale_date == date(2024, 3, 2)

    def test_from_dict_missing_key(self):
        with pytest.raises(KeyError):
            TradeRecord.from_dict({"ticker": "AAPL"})
