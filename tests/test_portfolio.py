"""포트폴리오/저장소 테스트"""

import json
from datetime import date

import pytest

from roi_journal.errors import StatementError, StoreError
from roi_journal.models import TradeRecord
from roi_journal.portfolio import Portfolio
from roi_journal.portfolio_store import PortfolioStore, seed_positions

STATEMENT = (
    "Symbol,Cost/Share,Qty,Sale Price,Date,Date\n"
    "AAPL,100,10,110,2024-01-01,2024-02-01\n"
    "MSFT,200,2,190,01/10/2024,02/10/2024\n"
)


def make_record(ticker="AAPL", cost=100.0, qty=1.0, sale=110.0) -> TradeRecord:
    return TradeRecord(
        ticker=ticker,
        cost_per_share=cost,
        quantity=qty,
        sale_price=sale,
        purchase_date=date(2024, 1, 1),
        sale_date=date(2024, 1, 11),
    )


@pytest.fixture
def store(tmp_path):
    return PortfolioStore(tmp_path / "positions.json")


class TestPortfolioStore:

    def test_missing_file_loads_empty(self, store):
        assert not store.exists
        assert store.load() == []

    def test_save_then_load(self, store):
        records = [make_record(), make_record("msft", 250.0, 3.5, 240.0)]
        assert store.save(records) is True
        assert store.load() == records

    def test_saved_json_layout(self, store):
        store.save([make_record()])
        data = json.loads(store.data_file.read_text(encoding="utf-8"))
        assert data[0]["ticker"] == "AAPL"
        assert data[0]["purchase_date"] == "2024-01-01"

    def test_corrupt_file(self, store):
        store.data_file.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError, match="Failed to read data file"):
            store.load()

    def test_not_a_list(self, store):
        store.data_file.write_text('{"ticker": "AAPL"}', encoding="utf-8")
        with pytest.raises(StoreError, match="expected a list"):
            store.load()

    def test_bad_item(self, store):
        store.data_file.write_text('[{"ticker": "AAPL"}]', encoding="utf-8")
        with pytest.raises(StoreError, match="Failed to parse data file"):
            store.load()

    def test_save_failure_returns_false(self, tmp_path):
        store = PortfolioStore(tmp_path / "missing_dir" / "positions.json")
        assert store.save([make_record()]) is False


class TestSeedPositions:

    def test_three_positions_ending_today(self):
        today = date(2024, 6, 30)
        seed = seed_positions(today)
        assert [r.ticker for r in seed] == ["AAPL", "AMD", "MSFT"]
        assert all(r.sale_date <= today for r in seed)
        assert seed[1].profit < 0

    def test_from_store_uses_seed_only_without_file(self, store):
        seed = seed_positions(date(2024, 6, 30))
        portfolio = Portfolio.from_store(store, seed=seed)
        assert portfolio.records == seed

        store.save([make_record("NVDA")])
        portfolio = Portfolio.from_store(store, seed=seed)
        assert [r.ticker for r in portfolio] == ["NVDA"]

    def test_from_store_without_seed(self, store):
        assert len(Portfolio.from_store(store)) == 0


class TestPortfolio:

    def test_add_replace_delete_persist(self, store):
        portfolio = Portfolio(store=store)
        assert portfolio.add(make_record("AAPL")) == 0
        assert portfolio.add(make_record("MSFT")) == 1

        portfolio.replace(0, make_record("TSLA", sale=90.0))
        removed = portfolio.delete(1)

        assert removed.ticker == "MSFT"
        assert [r.ticker for r in store.load()] == ["TSLA"]

    @pytest.mark.parametrize("index", [-1, 2])
    def test_bad_index(self, index):
        portfolio = Portfolio([make_record(), make_record()])
        with pytest.raises(IndexError):
            portfolio.replace(index, make_record())
        with pytest.raises(IndexError):
            portfolio.delete(index)
        assert len(portfolio) == 2

    def test_records_is_a_copy(self):
        portfolio = Portfolio([make_record()])
        portfolio.records.append(make_record("MSFT"))
        assert len(portfolio) == 1

    def test_filter_keeps_original_index(self):
        portfolio = Portfolio([make_record("AAPL"), make_record("MSFT"), make_record("AMD")])
        portfolio.filter_text = "a"
        assert [(i, r.ticker) for i, r in portfolio.filtered()] == [(0, "AAPL"), (2, "AMD")]

        portfolio.filter_text = ""
        assert len(portfolio.filtered()) == 3

    def test_import_appends_and_saves(self, tmp_path, store):
        path = tmp_path / "statement.csv"
        path.write_text(STATEMENT, encoding="utf-8")
        portfolio = Portfolio([make_record("NVDA")], store=store)

        assert portfolio.import_statement(path) == 2
        assert [r.ticker for r in portfolio] == ["NVDA", "AAPL", "MSFT"]
        assert len(store.load()) == 3

    def test_import_dry_run(self, tmp_path, store):
        path = tmp_path / "statement.csv"
        path.write_text(STATEMENT, encoding="utf-8")
        portfolio = Portfolio(store=store)

        assert portfolio.import_statement(path, dry_run=True) == 2
        assert len(portfolio) == 0
        assert not store.exists

    def test_import_failure_leaves_portfolio_unchanged(self, tmp_path, store):
        path = tmp_path / "statement.csv"
        path.write_text(STATEMENT + "TSLA,abc,1,2,2024-01-01,2024-01-02\n", encoding="utf-8")
        portfolio = Portfolio([make_record("NVDA")], store=store)

        with pytest.raises(StatementError, match="Line 4: Invalid cost/share"):
            portfolio.import_statement(path)
        assert [r.ticker for r in portfolio] == ["NVDA"]
        assert not store.exists
