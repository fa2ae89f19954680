"""Yahoo! Finance data models."""

from yahoofinance.models.bar import Bar
from yahoofinance.models.events import Dividend, Split
from yahoofinance.models.profile import Address, Company, Fund, Profile
from yahoofinance.models.quote import Quote, QuoteType, TradingSession

__all__ = [
    "Bar",
    "Quote",
    "QuoteType",
    "TradingSession",
    "Dividend",
    "Split",
    "Address",
    "Company",
    "Fund",
    "Profile",
]
