"""명세서 셀 단위 파서 (숫자, 날짜, 티커)"""

import re
from datetime import date, datetime
from typing import Optional

from ..errors import EmptyTickerError, InvalidDateError, InvalidNumberError

MISSING_SENTINEL = "--"

# 시도 순서대로
DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")

# ASCII 십진수만 허용 (밑줄 구분자, 전각 숫자, inf/nan 불가)
NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def is_missing(value: Optional[str]) -> bool:
    """빈 값 또는 "--" 이면 누락으로 본다 (0 과는 다르다)"""
    if value is None:
        return True
    trimmed = value.strip()
    return not trimmed or trimmed == MISSING_SENTINEL


def parse_number(value: str) -> Optional[float]:
    """$, 천단위 쉼표, 공백을 제거 후 float 변환

    Returns:
        누락 값이면 None

    Raises:
        ValueError: 숫자로 해석할 수 없을 때
    """
    if is_missing(value):
        return None
    cleaned = value.strip().replace(",", "").replace("$", "").replace(" ", "")
    if not NUMBER_PATTERN.fullmatch(cleaned):
        raise ValueError(f"숫자가 아님: {value!r}")
    return float(cleaned)


def parse_decimal_field(value: str, label: str) -> float:
    """필수 숫자 필드 파싱. 누락/오류 모두 InvalidNumberError"""
    try:
        number = parse_number(value)
    except ValueError:
        raise InvalidNumberError(label) from None
    if number is None:
        raise InvalidNumberError(label)
    return number


def parse_date_any(value: str) -> date:
    """YYYY-MM-DD → MM/DD/YYYY 순서로 시도"""
    trimmed = value.strip()
    # strptime 의 \d 는 전각 숫자도 받아들임
    if not trimmed.isascii():
        raise ValueError(f"지원하지 않는 날짜 형식: {value!r}")
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(trimmed, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"지원하지 않는 날짜 형식: {value!r}")


def parse_date_field(value: str, label: str) -> date:
    try:
        return parse_date_any(value)
    except ValueError:
        raise InvalidDateError(label) from None


def parse_ticker(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        raise EmptyTickerError()
    return trimmed.upper()
