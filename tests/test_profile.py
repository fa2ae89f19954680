"""Tests for quote-page profile scraping."""

from __future__ import annotations

import json

import pytest
import requests

from yahoofinance import load_profile
from yahoofinance.client import YahooFinanceClient, set_default_client
from yahoofinance.errors import YahooFinanceError, YahooFinanceErrorCode
from yahoofinance.models.profile import Address, Company, Fund
from yahoofinance.profile import ProfileScraper, extract_store

from conftest import FakeResponse, FakeSession

APPLE_STORE = {
    "quoteType": {"quoteType": "EQUITY", "longName": "Apple Inc."},
    "summaryProfile": {
        "address1": "One Apple Park Way",
        "city": "Cupertino",
        "state": "CA",
        "zip": "95014",
        "country": "United States",
        "industry": "Consumer Electronics",
        "sector": "Technology",
        "longBusinessSummary": "Apple Inc. designs, manufactures, and markets smartphones.",
        "website": "https://www.apple.com",
        "fullTimeEmployees": 161000,
    },
}

QQQ_STORE = {
    "quoteType": {"quoteType": "ETF", "longName": "Invesco QQQ Trust"},
    "fundProfile": {"legalType": "Exchange Traded Fund", "family": "Invesco"},
}


def _page(store: dict | None = None, raw: str | None = None) -> str:
    if raw is None:
        app = {"context": {"dispatcher": {"stores": {"QuoteSummaryStore": store}}}}
        raw = json.dumps(app)
    return "\n".join([
        "<html><head><script>",
        "(function (root) {",
        f"root.App.main = {raw};",
        "}(this));",
        "</script></head></html>",
    ])


def _scraper(config, response) -> tuple[ProfileScraper, FakeSession]:
    session = FakeSession(response)
    return ProfileScraper(config, session=session), session


class TestProfileScraper:
    def test_company(self, config):
        scraper, session = _scraper(config, FakeResponse(text=_page(APPLE_STORE)))
        profile = scraper.load("AAPL")

        assert session.calls == [("http://yahoo.test/quote/AAPL", {"p": "AAPL"})]
        assert isinstance(profile, Company)
        assert profile.name == "Apple Inc."
        assert profile.industry == "Consumer Electronics"
        assert profile.sector == "Technology"
        assert profile.website == "https://www.apple.com"
        assert profile.employees == 161000
        assert profile.address == Address(
            street1="One Apple Park Way", city="Cupertino", state="CA",
            country="United States", zip="95014",
        )

    def test_company_without_profile(self, config):
        store = {"quoteType": {"quoteType": "EQUITY", "longName": "Tiny Co"}}
        scraper, _ = _scraper(config, FakeResponse(text=_page(store)))
        assert scraper.load("TINY") == Company(name="Tiny Co")

    def test_fund(self, config):
        scraper, _ = _scraper(config, FakeResponse(text=_page(QQQ_STORE)))
        profile = scraper.load("QQQ")
        assert profile == Fund(name="Invesco QQQ Trust", kind="Exchange Traded Fund", family="Invesco")

    def test_company_with_bad_employee_count(self, config):
        store = {
            "quoteType": {"quoteType": "EQUITY", "longName": "X"},
            "summaryProfile": {"fullTimeEmployees": "lots"},
        }
        scraper, _ = _scraper(config, FakeResponse(text=_page(store)))
        with pytest.raises(YahooFinanceError) as exc_info:
            scraper.load("X")
        assert exc_info.value.code == YahooFinanceErrorCode.BAD_DATA

    def test_company_with_non_dict_profile(self, config):
        store = {"quoteType": {"quoteType": "EQUITY", "longName": "X"}, "summaryProfile": ["x"]}
        scraper, _ = _scraper(config, FakeResponse(text=_page(store)))
        with pytest.raises(YahooFinanceError) as exc_info:
            scraper.load("X")
        assert exc_info.value.code == YahooFinanceErrorCode.BAD_DATA

    def test_fund_with_non_dict_profile(self, config):
        store = {"quoteType": {"quoteType": "ETF", "longName": "X"}, "fundProfile": 7}
        scraper, _ = _scraper(config, FakeResponse(text=_page(store)))
        with pytest.raises(YahooFinanceError) as exc_info:
            scraper.load("X")
        assert exc_info.value.code == YahooFinanceErrorCode.BAD_DATA

    def test_fund_without_legal_type(self, config):
        store = {"quoteType": {"quoteType": "ETF", "longName": "X"}, "fundProfile": {}}
        scraper, _ = _scraper(config, FakeResponse(text=_page(store)))
        with pytest.raises(YahooFinanceError) as exc_info:
            scraper.load("X")
        assert exc_info.value.code == YahooFinanceErrorCode.BAD_DATA

    def test_unsupported_type(self, config):
        store = {"quoteType": {"quoteType": "INDEX", "longName": "Dow Jones"}}
        scraper, _ = _scraper(config, FakeResponse(text=_page(store)))
        with pytest.raises(YahooFinanceError) as exc_info:
            scraper.load("^DJI")
        assert exc_info.value.code == YahooFinanceErrorCode.UNSUPPORTED_SECURITY
        assert "INDEX" in exc_info.value.message

    def test_missing_quote_type(self, config):
        scraper, _ = _scraper(config, FakeResponse(text=_page({})))
        with pytest.raises(YahooFinanceError) as exc_info:
            scraper.load("AAPL")
        assert exc_info.value.code == YahooFinanceErrorCode.BAD_DATA

    def test_http_error(self, config):
        scraper, _ = _scraper(config, FakeResponse(text="gone", status_code=404))
        with pytest.raises(YahooFinanceError) as exc_info:
            scraper.load("NOPE")
        assert exc_info.value.code == YahooFinanceErrorCode.CALL_FAILED
        assert not exc_info.value.retryable

    def test_server_error_is_retryable(self, config):
        scraper, _ = _scraper(config, FakeResponse(text="oops", status_code=503))
        with pytest.raises(YahooFinanceError) as exc_info:
            scraper.load("AAPL")
        assert exc_info.value.retryable

    def test_network_error(self, config):
        scraper, _ = _scraper(config, requests.ConnectionError("down"))
        with pytest.raises(YahooFinanceError) as exc_info:
            scraper.load("AAPL")
        assert exc_info.value.code == YahooFinanceErrorCode.REQUEST_FAILED
        assert exc_info.value.retryable


class TestExtractStore:
    def test_no_data_line(self):
        with pytest.raises(YahooFinanceError) as exc_info:
            extract_store("<html><body>nothing here</body></html>")
        assert exc_info.value.code == YahooFinanceErrorCode.MISSING_DATA

    def test_bad_json(self):
        with pytest.raises(YahooFinanceError) as exc_info:
            extract_store(_page(raw="{broken"))
        assert exc_info.value.code == YahooFinanceErrorCode.BAD_DATA

    def test_missing_store(self):
        with pytest.raises(YahooFinanceError) as exc_info:
            extract_store(_page(raw='{"context": {}}'))
        assert exc_info.value.code == YahooFinanceErrorCode.BAD_DATA

    def test_extracts(self):
        assert extract_store(_page(QQQ_STORE)) == QQQ_STORE


class TestProfileHelpers:
    def test_client_profile(self, config):
        session = FakeSession(FakeResponse(text=_page(APPLE_STORE)))
        client = YahooFinanceClient(config, session=session)
        assert client.get_profile("AAPL").name == "Apple Inc."

    def test_load_profile_uses_default_client(self, config):
        session = FakeSession(FakeResponse(text=_page(QQQ_STORE)))
        set_default_client(YahooFinanceClient(config, session=session))
        try:
            assert isinstance(load_profile("QQQ"), Fund)
        finally:
            set_default_client(None)
