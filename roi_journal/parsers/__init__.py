"""증권사 명세서 CSV 파서 모듈"""

from .base_parser import BaseParser
from .header_detector import HeaderMap, detect_header
from .statement_parser import StatementParser, parse_statement

__all__ = [
    "BaseParser",
    "HeaderMap",
    "StatementParser",
    "detect_header",
    "parse_statement",
]
