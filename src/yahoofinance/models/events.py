"""Corporate event models (dividends and splits)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Dividend:
    """Cash dividend paid on a date.

    Attributes:
        timestamp: Ex-dividend date (UTC).
        amount: Dividend amount per share.
    """

    timestamp: datetime
    amount: float


@dataclass(frozen=True)
class Split:
    """Stock split.

    Attributes:
        timestamp: Effective date (UTC).
        numerator: New shares per ``denominator`` old shares.
        denominator: Old shares.
        ratio: Ratio as reported, e.g. ``"4:1"``.
    """

    timestamp: datetime
    numerator: int
    denominator: int
    ratio: str

    @property
    def factor(self) -> float:
        """Multiplier applied to the share count."""
        return self.numerator / self.denominator if self.denominator else 0.0
