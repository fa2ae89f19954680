"""Symbol profiles scraped from the Yahoo! Finance quote page.

The quote page embeds its application state as a single JavaScript
assignment (``root.App.main = {...};``). The ``QuoteSummaryStore`` inside
it carries the quote type plus either a ``summaryProfile`` (equities) or a
``fundProfile`` (ETFs).
"""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

from yahoofinance.config import YahooFinanceConfig
from yahoofinance.errors import YahooFinanceError, YahooFinanceErrorCode
from yahoofinance.models.profile import Address, Company, Fund, Profile

LOGGER = logging.getLogger(__name__)

DATA_VAR = "root.App.main"


class ProfileScraper:
    """Fetch and parse quote pages into ``Company`` / ``Fund`` profiles."""

    def __init__(
        self,
        config: YahooFinanceConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or YahooFinanceConfig()
        self.base_url = self.config.quote_url.rstrip("/")
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self.config.user_agent
        self.session = session

    def load(self, symbol: str) -> Profile:
        store = self.scrape(symbol)
        return self.parse_store(store)

    def scrape(self, symbol: str) -> dict[str, Any]:
        """Return the raw ``QuoteSummaryStore`` for a symbol."""
        url = f"{self.base_url}/quote/{symbol}"
        LOGGER.debug("GET %s", url)
        try:
            resp = self.session.get(url, params={"p": symbol}, timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise YahooFinanceError(
                f"Yahoo! call to {url} failed: {exc}",
                code=YahooFinanceErrorCode.REQUEST_FAILED,
                retryable=True,
            ) from exc

        if not resp.ok:
            raise YahooFinanceError(
                f"Yahoo! call failed. '{resp.url}' returned a {resp.status_code} result.",
                code=YahooFinanceErrorCode.CALL_FAILED,
                retryable=resp.status_code == 429 or resp.status_code >= 500,
            )
        return extract_store(resp.text)

    @staticmethod
    def parse_store(store: dict[str, Any]) -> Profile:
        try:
            quote_type = store["quoteType"]
            name = quote_type["longName"]
            kind = quote_type["quoteType"]
        except (KeyError, TypeError) as exc:
            raise YahooFinanceError(
                f"Yahoo! returned invalid data - missing {exc}",
                code=YahooFinanceErrorCode.BAD_DATA,
            ) from exc

        if kind == "EQUITY":
            return _company(name, store.get("summaryProfile"))
        if kind == "ETF":
            return _fund(name, store.get("fundProfile"))
        raise YahooFinanceError(
            f"We currently do not support securities of type '{kind}'",
            code=YahooFinanceErrorCode.UNSUPPORTED_SECURITY,
        )


def extract_store(html: str) -> dict[str, Any]:
    """Pull ``context.dispatcher.stores.QuoteSummaryStore`` out of a quote page."""
    line = next(
        (ln.strip() for ln in html.splitlines() if ln.strip().startswith(DATA_VAR)),
        None,
    )
    if line is None:
        raise YahooFinanceError(
            "Yahoo! returned invalid data - no quote data",
            code=YahooFinanceErrorCode.MISSING_DATA,
        )

    data = line[len(DATA_VAR):].lstrip(" =").rstrip(";")
    try:
        payload = json.loads(data)
        return payload["context"]["dispatcher"]["stores"]["QuoteSummaryStore"]
    except (ValueError, KeyError, TypeError) as exc:
        raise YahooFinanceError(
            f"Yahoo! returned invalid data - {exc}",
            code=YahooFinanceErrorCode.BAD_DATA,
        ) from exc


def _company(name: str, profile: dict[str, Any] | None) -> Company:
    if not profile:
        return Company(name=name)
    try:
        employees = profile.get("fullTimeEmployees")
        return Company(
            name=name,
            address=Address(
                street1=profile.get("address1"),
                street2=profile.get("address2"),
                city=profile.get("city"),
                state=profile.get("state"),
                country=profile.get("country"),
                zip=profile.get("zip"),
            ),
            industry=profile.get("industry"),
            sector=profile.get("sector"),
            summary=profile.get("longBusinessSummary"),
            website=profile.get("website"),
            employees=int(employees) if employees is not None else None,
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise YahooFinanceError(
            f"Yahoo! returned invalid data - bad company profile: {exc}",
            code=YahooFinanceErrorCode.BAD_DATA,
        ) from exc


def _fund(name: str, profile: dict[str, Any] | None) -> Fund:
    if not isinstance(profile, dict) or "legalType" not in profile:
        raise YahooFinanceError(
            "Yahoo! returned invalid data - fund profile missing",
            code=YahooFinanceErrorCode.BAD_DATA,
        )
    return Fund(name=name, kind=profile["legalType"], family=profile.get("family"))
