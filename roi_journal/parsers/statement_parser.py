"""증권사 실현손익 명세서 CSV 파서

여러 표가 섞인 리포트에서 "TAXABLE G&L DETAILS" 표를 찾아 헤더를 감지하고,
티커가 요약 행에만 찍히고 상세 행에서는 생략되는 형식을 지원한다.

행 처리는 (ParserState, 행) → ParserState 형태의 순수 fold 로 구현되어
합성 행 목록만으로 상태 전이를 테스트할 수 있다.
"""

import csv
import io
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .base_parser import BaseParser
from .field_parsers import (
    MISSING_SENTINEL,
    is_missing,
    parse_date_field,
    parse_decimal_field,
    parse_ticker,
)
from .header_detector import POSITIONAL_HEADER, HeaderMap, detect_header
from ..errors import DateOrderError, EmptyResultError, StatementError, StatementReadError
from ..models import TradeRecord

logger = logging.getLogger(__name__)

SECTION_MARKER = "taxable g&l details"
SUMMARY_LABELS = ("total", "subtotal")

Row = Tuple[int, List[str]]  # (1-based 행 번호, 셀 목록)


class ParserPhase(Enum):
    SEEKING_SECTION = "seeking_section"
    SEEKING_HEADER = "seeking_header"
    STREAMING = "streaming"


@dataclass(frozen=True)
class ParserState:
    """한 번의 파싱 호출 동안만 유지되는 상태

    records 는 행마다 복사하지 않고 fold_rows 가 끝날 때 한 번에 채운다.
    """

    in_target_section: bool = False
    current_header: Optional[HeaderMap] = None
    current_ticker: Optional[str] = None
    header_seen: bool = False  # 한 번이라도 헤더를 찾았는지
    records: Tuple[TradeRecord, ...] = field(default_factory=tuple)

    @property
    def phase(self) -> ParserPhase:
        if self.current_header is not None:
            return ParserPhase.STREAMING
        if self.in_target_section:
            return ParserPhase.SEEKING_HEADER
        return ParserPhase.SEEKING_SECTION


StepResult = Tuple[ParserState, Optional[TradeRecord]]  # (다음 상태, 이 행에서 나온 거래)


def read_rows(text: str) -> List[Row]:
    """CSV 텍스트를 (행 번호, 공백 제거된 셀) 목록으로 변환. 컬럼 수는 행마다 달라도 됨

    Raises:
        StatementError: CSV 문법 오류 (행 번호 포함)
    """
    rows: List[Row] = []
    reader = csv.reader(io.StringIO(text))
    line_no = 0
    while True:
        line_no += 1
        try:
            cells = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            raise StatementError(str(e), line_no) from e
        rows.append((line_no, [cell.strip() for cell in cells]))
    return rows


def is_section_marker(cells: Sequence[str]) -> bool:
    return SECTION_MARKER in " ".join(cells).lower()


def is_summary_row(cells: Sequence[str]) -> bool:
    """Total/Subtotal 합계 행인지 (헤더에 포함된 "Total" 단어는 제외)"""
    if len(cells) == 1:
        only = cells[0].strip().lower()
        if any(label in only for label in SUMMARY_LABELS):
            return True
    first = cells[0].strip().lower() if cells else ""
    return first in SUMMARY_LABELS


def is_context_ticker(raw: str) -> bool:
    """티커 컨텍스트를 갱신하는 셀인지 ("Sell ..." 상세 행은 제외)"""
    value = raw.strip()
    if not value or value == MISSING_SENTINEL:
        return False
    return not value.lower().startswith("sell")


def _cell(cells: Sequence[str], idx: int) -> str:
    return cells[idx] if idx < len(cells) else ""


def handle_data_row(state: ParserState, header: HeaderMap, line_no: int,
                    cells: Sequence[str]) -> StepResult:
    """헤더 매핑(감지된 것 또는 고정 위치)에 따라 데이터 행 한 줄 처리

    컨텍스트 행 여부와 데이터 행 여부를 각각 독립적으로 판단한다.
    """
    try:
        raw_ticker = _cell(cells, header.ticker)
        if is_context_ticker(raw_ticker):
            state = replace(state, current_ticker=parse_ticker(raw_ticker))

        required = header.required_columns()
        if any(is_missing(_cell(cells, idx)) for idx, _ in required):
            return state, None

        if state.current_ticker is None:
            return state, None

        cost = parse_decimal_field(_cell(cells, header.cost), "cost/share")
        quantity = parse_decimal_field(_cell(cells, header.quantity), "quantity")
        sale_price = parse_decimal_field(_cell(cells, header.sale_price), "sale price")
        purchase_date = parse_date_field(_cell(cells, header.purchase_date), "purchase date")
        sale_date = parse_date_field(_cell(cells, header.sale_date), "sale date")

        if sale_date < purchase_date:
            raise DateOrderError()

        record = TradeRecord(
            ticker=state.current_ticker,
            cost_per_share=cost,
            quantity=quantity,
            sale_price=sale_price,
            purchase_date=purchase_date,
            sale_date=sale_date,
        )
    except StatementError as e:
        raise e.at_line(line_no)

    return state, record


def step(state: ParserState, row: Row) -> StepResult:
    """헤더 감지 모드에서 한 행을 처리"""
    line_no, cells = row
    if not cells:
        return state, None

    if is_section_marker(cells):
        logger.debug(f"Line {line_no}: 대상 섹션 시작")
        return replace(state, in_target_section=True, current_header=None), None

    # 대상 표 이전의 머리말은 건너뜀
    if not state.in_target_section and not state.header_seen:
        return state, None

    if is_summary_row(cells):
        return state, None

    if state.current_header is None:
        header = detect_header(cells)
        if header is None:
            return state, None
        logger.debug(f"Line {line_no}: 헤더 감지 {header}")
        return replace(state, current_header=header, header_seen=True), None

    return handle_data_row(state, state.current_header, line_no, cells)


def positional_step(state: ParserState, row: Row) -> StepResult:
    """헤더가 없는 파일용: 고정 컬럼 순서로 한 행을 처리"""
    line_no, cells = row
    if not cells:
        return state, None
    if is_section_marker(cells):
        return replace(state, in_target_section=True), None
    if not state.in_target_section or is_summary_row(cells):
        return state, None
    # 표 앞뒤의 짧은 행은 건너뜀
    if len(cells) < POSITIONAL_HEADER.width:
        return state, None
    return handle_data_row(state, POSITIONAL_HEADER, line_no, cells)


def fold_rows(rows: Iterable[Row], state: Optional[ParserState] = None,
              positional: bool = False) -> ParserState:
    """행 목록 전체에 step 을 적용한 최종 상태"""
    if state is None:
        state = ParserState()
    reducer = positional_step if positional else step
    emitted = list(state.records)
    for row in rows:
        state, record = reducer(state, row)
        if record is not None:
            emitted.append(record)
    return replace(state, records=tuple(emitted))


def initial_state(rows: Sequence[Row]) -> ParserState:
    """섹션 표시가 없는 파일은 처음부터 대상 섹션으로 본다"""
    has_marker = any(is_section_marker(cells) for _, cells in rows)
    return ParserState(in_target_section=not has_marker)


def parse_rows(rows: Sequence[Row]) -> List[TradeRecord]:
    """헤더 감지 → (헤더를 끝내 못 찾으면) 고정 위치 순으로 파싱"""
    start = initial_state(rows)
    state = fold_rows(rows, start)
    if not state.header_seen:
        logger.info("인식 가능한 헤더가 없어 고정 컬럼 순서(ticker,cost,qty,sale,purchase,sale)로 파싱")
        state = fold_rows(rows, start, positional=True)

    if not state.records:
        raise EmptyResultError()
    return list(state.records)


def parse_statement(path: Union[str, Path]) -> List[TradeRecord]:
    """명세서 CSV 파일을 읽어 TradeRecord 리스트 반환

    Raises:
        StatementError: 파일 읽기 실패, 행 단위 오류("Line <n>: ..."), 결과 없음
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise StatementReadError(path, e) from e

    records = parse_rows(read_rows(text))
    logger.info(f"명세서 파싱 완료: {len(records)}건 ({Path(path).name})")
    return records


class StatementParser(BaseParser):
    """실현손익 명세서 파서"""

    @staticmethod
    def can_parse(header_row: List[str]) -> bool:
        return detect_header([h.strip() for h in header_row]) is not None

    def parse(self, file_path: Path) -> List[TradeRecord]:
        return parse_statement(file_path)
