"""Yahoo! Finance error types."""

from __future__ import annotations

from enum import Enum


class YahooFinanceErrorCode(Enum):
    """Error classification codes."""

    BAD_DATA = "bad_data"
    CALL_FAILED = "call_failed"
    CHART_FAILED = "chart_failed"
    INTERNAL_LOGIC = "internal_logic"
    INVALID_START_DATE = "invalid_start_date"
    MISSING_DATA = "missing_data"
    NO_INTRADAY = "no_intraday"
    REQUEST_FAILED = "request_failed"
    UNEXPECTED_RESPONSE = "unexpected_response"
    UNSUPPORTED_SECURITY = "unsupported_security"
    VALIDATION_FAILED = "validation_failed"


class YahooFinanceError(Exception):
    """Yahoo! Finance exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the same call may succeed if repeated later.
    """

    def __init__(
        self,
        message: str,
        code: YahooFinanceErrorCode = YahooFinanceErrorCode.UNEXPECTED_RESPONSE,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"
