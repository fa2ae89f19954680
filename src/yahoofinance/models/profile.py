"""Symbol profile data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Address:
    """Address on file for a company, usually its headquarters."""

    street1: str | None = None
    street2: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip: str | None = None


@dataclass(frozen=True)
class Company:
    """Profile of an equity symbol.

    Attributes:
        name: Common name for the symbol.
        address: Address on file, typically the HQ.
        industry: Industry according to Yahoo!, e.g. "Gold".
        sector: Sector according to Yahoo!, e.g. "Basic Materials".
        summary: Business summary.
        website: Corporate home page.
        employees: Full-time employee count.
    """

    name: str
    address: Address | None = None
    industry: str | None = None
    sector: str | None = None
    summary: str | None = None
    website: str | None = None
    employees: int | None = None


@dataclass(frozen=True)
class Fund:
    """Profile of an exchange traded fund.

    Attributes:
        name: Common name for the fund.
        kind: Legal type, e.g. "Exchange Traded Fund".
        family: Fund family.
    """

    name: str
    kind: str
    family: str | None = None


Profile = Union[Company, Fund]
