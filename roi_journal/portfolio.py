"""포트폴리오 (메모리 내 청산 포지션 목록)"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .models import TradeRecord
from .parsers.statement_parser import parse_statement
from .portfolio_store import PortfolioStore

logger = logging.getLogger(__name__)


class Portfolio:
    """순서가 있는 TradeRecord 목록과 티커 필터

    store 가 지정되면 변경될 때마다 전체 목록을 저장한다.
    """

    def __init__(self, records: Optional[List[TradeRecord]] = None,
                 store: Optional[PortfolioStore] = None):
        self._records: List[TradeRecord] = list(records or [])
        self.store = store
        self.filter_text = ""

    @classmethod
    def from_store(cls, store: PortfolioStore, seed: Optional[List[TradeRecord]] = None) -> "Portfolio":
        """저장소에서 로드. 저장 파일이 없으면 seed 로 시작"""
        if not store.exists and seed:
            logger.info(f"저장 파일이 없어 예시 포지션 {len(seed)}건으로 시작합니다")
            return cls(seed, store)
        return cls(store.load(), store)

    @property
    def records(self) -> List[TradeRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TradeRecord]:
        return iter(list(self._records))

    def __getitem__(self, index: int) -> TradeRecord:
        return self._records[index]

    def add(self, record: TradeRecord) -> int:
        """추가 후 인덱스 반환"""
        self._records.append(record)
        self._persist()
        return len(self._records) - 1

    def replace(self, index: int, record: TradeRecord):
        """index 위치의 포지션을 통째로 교체 (수정)"""
        self._check_index(index)
        self._records[index] = record
        self._persist()

    def delete(self, index: int) -> TradeRecord:
        self._check_index(index)
        removed = self._records.pop(index)
        self._persist()
        return removed

    def import_statement(self, path: Union[str, Path], dry_run: bool = False) -> int:
        """명세서 가져오기 (전부 성공하거나 전혀 반영되지 않음)

        Returns:
            가져온 건수

        Raises:
            StatementError: 파싱 실패 시, 포트폴리오는 변경되지 않음
        """
        new_records = parse_statement(path)
        if dry_run:
            logger.info(f"[DRY-RUN] {len(new_records)}건을 가져올 예정")
            return len(new_records)

        self._records.extend(new_records)
        self._persist()
        logger.info(f"명세서에서 {len(new_records)}건 가져옴 (총 {len(self._records)}건)")
        return len(new_records)

    def matches(self, record: TradeRecord) -> bool:
        if not self.filter_text:
            return True
        return self.filter_text.upper() in record.ticker.upper()

    def filtered(self) -> List[Tuple[int, TradeRecord]]:
        """필터에 맞는 (원본 인덱스, 포지션) 목록"""
        return [(i, r) for i, r in enumerate(self._records) if self.matches(r)]

    def _check_index(self, index: int):
        if not 0 <= index < len(self._records):
            raise IndexError(f"position index out of range: {index}")

    def _persist(self):
        if self.store is not None:
            self.store.save(self._records)
