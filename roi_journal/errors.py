"""명세서 가져오기 예외 정의"""

from typing import Optional


class StatementError(ValueError):
    """명세서 파싱/거래 생성 오류의 기본 클래스

    line_no 가 지정되면 메시지 앞에 "Line <n>: " 을 붙인다.
    """

    def __init__(self, reason: str, line_no: Optional[int] = None):
        self.reason = reason
        self.line_no = line_no
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line_no is None:
            return self.reason
        return f"Line {self.line_no}: {self.reason}"

    def at_line(self, line_no: int) -> "StatementError":
        """행 번호를 기록하고 메시지를 갱신한 뒤 자기 자신을 반환"""
        self.line_no = line_no
        self.args = (self._format(),)
        return self


class StatementReadError(StatementError):
    """파일을 읽을 수 없음"""

    def __init__(self, path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read {path}: {cause}")


class InvalidNumberError(StatementError):
    """숫자 필드 파싱 실패"""

    def __init__(self, label: str, line_no: Optional[int] = None):
        self.label = label
        super().__init__(f"Invalid {label}", line_no)


class InvalidDateError(StatementError):
    """날짜 필드 파싱 실패"""

    def __init__(self, label: str, line_no: Optional[int] = None):
        self.label = label
        super().__init__(f"Invalid {label}, expected YYYY-MM-DD or MM/DD/YYYY", line_no)


class EmptyTickerError(StatementError):
    def __init__(self, line_no: Optional[int] = None):
        super().__init__("Ticker cannot be empty", line_no)


class DateOrderError(StatementError):
    """매도일이 매수일보다 앞섬"""

    def __init__(self, line_no: Optional[int] = None):
        super().__init__("sale date cannot be before purchase date", line_no)


class EmptyResultError(StatementError):
    """가져올 행이 하나도 없음 (행 번호 없음)"""

    def __init__(self):
        super().__init__("No rows found to import")


class StoreError(Exception):
    """포지션 저장 파일 로드 실패"""
