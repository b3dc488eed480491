"""포지션 저장 모듈
청산 포지션 목록을 JSON 파일로 저장/로드합니다.
"""

import json
import logging
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional, Union

from .errors import StoreError
from .models import TradeRecord

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "positions.json"


class PortfolioStore:
    """포지션 JSON 파일 저장소"""

    def __init__(self, data_file: Union[str, Path] = DEFAULT_DATA_FILE):
        self.data_file = Path(data_file)

    @property
    def exists(self) -> bool:
        return self.data_file.exists()

    def load(self) -> List[TradeRecord]:
        """저장 파일 로드 (파일이 없으면 빈 리스트)

        Raises:
            StoreError: 파일을 읽거나 해석할 수 없을 때
        """
        if not self.exists:
            logger.debug(f"저장 파일 없음: {self.data_file}")
            return []

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read data file: {e}") from e

        if not isinstance(raw, list):
            raise StoreError(f"Failed to parse data file: expected a list, got {type(raw).__name__}")

        try:
            records = [TradeRecord.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Failed to parse data file: {e}") from e

        logger.info(f"포지션 {len(records)}건 로드 ({self.data_file})")
        return records

    def save(self, records: List[TradeRecord]) -> bool:
        """전체 목록 저장. 실패해도 예외 없이 경고만 남김"""
        try:
            with open(self.data_file, "w", encoding="utf-8") as f:
                json.dump([r.to_dict() for r in records], f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.warning(f"포지션 저장 실패: {e}")
            return False

        logger.debug(f"포지션 {len(records)}건 저장 ({self.data_file})")
        return True


def seed_positions(today: Optional[date] = None) -> List[TradeRecord]:
    """저장 파일이 없을 때 보여줄 예시 포지션 3건"""
    today = today or date.today()
    return [
        TradeRecord(
            ticker="AAPL", cost_per_share=110.0, quantity=40.0, sale_price=127.5,
            purchase_date=today - timedelta(days=12), sale_date=today,
        ),
        TradeRecord(
            ticker="AMD", cost_per_share=64.0, quantity=100.0, sale_price=59.4,
            purchase_date=today - timedelta(days=4), sale_date=today,
        ),
        TradeRecord(
            ticker="MSFT", cost_per_share=320.5, quantity=10.0, sale_price=355.2,
            purchase_date=today - timedelta(days=25), sale_date=today - timedelta(days=5),
        ),
    ]
