"""Data quality validation for bars and quotes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from yahoofinance.models.bar import Bar
from yahoofinance.models.quote import Quote


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def validate_bars(bars: list[Bar]) -> ValidationResult:
    """Run all quality checks on a list of daily bars.

    An empty list passes: Yahoo! legitimately returns no bars for a window
    with no trading (or for a symbol that just listed).

    Checks:
        1. No NaN/Inf prices
        2. Volume sanity (non-negative)
        3. Timestamp ordering (strictly increasing)
        4. OHLC consistency (high >= low, high >= open/close, low <= open/close)
    """
    result = ValidationResult()
    if not bars:
        return result

    # 1. Finite prices
    bad_values = 0
    for b in bars:
        for val in (b.open, b.high, b.low, b.close):
            if math.isnan(val) or math.isinf(val):
                bad_values += 1
    if bad_values:
        result.checks.append(ValidationCheck("no_nulls", False, f"{bad_values} NaN/Inf values"))
    else:
        result.checks.append(ValidationCheck("no_nulls", True))

    # 2. Volume sanity
    neg_vol = sum(1 for b in bars if b.volume < 0)
    if neg_vol:
        result.checks.append(
            ValidationCheck("volume_sanity", False, f"{neg_vol} bars with negative volume")
        )
    else:
        result.checks.append(ValidationCheck("volume_sanity", True))

    # 3. Timestamp ordering
    out_of_order = sum(
        1 for i in range(1, len(bars)) if bars[i].timestamp <= bars[i - 1].timestamp
    )
    if out_of_order:
        result.checks.append(
            ValidationCheck("timestamp_order", False, f"{out_of_order} out of order")
        )
    else:
        result.checks.append(ValidationCheck("timestamp_order", True))

    # 4. OHLC consistency
    inconsistent = 0
    for b in bars:
        if b.high < b.low:
            inconsistent += 1
        elif b.high < b.open or b.high < b.close:
            inconsistent += 1
        elif b.low > b.open or b.low > b.close:
            inconsistent += 1
    if inconsistent:
        result.checks.append(
            ValidationCheck("ohlc_consistency", False, f"{inconsistent} bars with H<L or H<O/C")
        )
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    return result


def validate_quote(quote: Quote) -> bool:
    """Basic quote sanity check: finite positive price, non-negative volume."""
    if math.isnan(quote.price) or math.isinf(quote.price):
        return False
    if quote.price <= 0:
        return False
    return quote.volume >= 0
