"""Pytest configuration and fixtures."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

import pytest
from tenacity import wait_none

from tender_intel.adapters.base import BaseAdapter, SourceSession
from tender_intel.digest.sender import DigestSender
from tender_intel.models import RawTender, ScoreBreakdown, ScoredTender

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    """Keep tenacity's attempt count but skip the backoff sleeps."""
    monkeypatch.setattr(SourceSession._send.retry, "wait", wait_none())
    monkeypatch.setattr(DigestSender._post_email.retry, "wait", wait_none())


@pytest.fixture
def now() -> datetime:
    return NOW


def make_tender(**overrides: Any) -> RawTender:
    """RawTender with sensible electricity-supply defaults."""
    fields = {
        "id": "fat-012345-2026",
        "source": "find-a-tender",
        "url": "https://www.find-tender.service.gov.uk/Notice/012345-2026",
        "title": "Supply of Electricity to Council Buildings",
        "description": "Half-hourly electricity supply via framework call-off",
        "buyer": "Manchester City Council",
        "location": "Manchester",
        "published_date": "2026-10-15",
        "deadline_date": (NOW + timedelta(days=30)).isoformat(),
        "value": 1_250_000.0,
        "cpv_codes": ["09310000"],
    }
    fields.update(overrides)
    return RawTender(**fields)


def make_scored(total: int = 50, **overrides: Any) -> ScoredTender:
    """ScoredTender built directly, for aggregation tests that don't need real scoring."""
    fields = {
        "id": "fat-1",
        "source": "find-a-tender",
        "url": "https://example.com/1",
        "title": "Electricity supply",
        "buyer": "Some Council",
        "score": ScoreBreakdown(total=total),
        "priority": "MEDIUM",
        "recommendation": "Bid - Worth Pursuing",
        "procurement_route": "Open Tender",
        "buyer_type": "Local Authority",
        "region": "North West",
    }
    fields.update(overrides)
    return ScoredTender(**fields)


class StaticAdapter(BaseAdapter):
    """Adapter that returns canned items (or raises) without touching the network."""

    def __init__(
        self,
        name: str,
        items: Optional[List[Any]] = None,
        error: Optional[Exception] = None,
        health_only: bool = False,
        delay: float = 0.0,
    ):
        super().__init__()
        self._name = name
        self._items = items or []
        self._error = error
        self.health_only = health_only
        self._delay = delay

    @property
    def source_name(self) -> str:
        return self._name

    async def collect(self, session: SourceSession, days: int) -> List[Any]:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return list(self._items)


class ExplodingAdapter(StaticAdapter):
    """Adapter whose run() itself raises, bypassing BaseAdapter's isolation."""

    async def run(self, days: int):
        raise RuntimeError("adapter crashed")


# ---------------------------------------------------------------------------
# Upstream payloads
# ---------------------------------------------------------------------------

@pytest.fixture
def fat_release() -> dict:
    """A Find a Tender OCDS release for an electricity supply notice."""
    return {
        "id": "012345-2026",
        "ocid": "ocds-h6vhtk-04a1b2",
        "datePublished": "2026-10-01T09:00:00Z",
        "tag": ["tender"],
        "buyer": {"name": "Manchester City Council"},
        "tender": {
            "title": "Supply of Electricity - Half Hourly Sites",
            "description": "Supply of half-hourly electricity to corporate buildings via framework call-off",
            "status": "active",
            "value": {"amount": 1250000, "currency": "GBP"},
            "tenderPeriod": {"endDate": "2026-11-14T12:00:00Z"},
            "classification": {"scheme": "CPV", "id": "09310000"},
            "items": [
                {
                    "id": "1",
                    "deliveryAddresses": [{"region": "Manchester"}],
                    "additionalClassifications": [{"scheme": "CPV", "id": "65310000"}],
                }
            ],
        },
    }


@pytest.fixture
def cf_award_release() -> dict:
    """A Contracts Finder award-stage release."""
    return {
        "ocid": "ocds-b5fd17-aaa111",
        "datePublished": "2026-06-01T00:00:00Z",
        "tag": ["award"],
        "buyer": {"name": "Salford City Council"},
        "tender": {
            "title": "Electricity supply contract",
            "deliveryAddresses": [{"region": "North West"}],
        },
        "awards": [
            {
                "id": "1",
                "date": "2026-05-20",
                "value": {"amount": 750000},
                "suppliers": [{"name": "Example Energy Ltd"}],
            }
        ],
    }


@pytest.fixture
def bidstats_listing() -> str:
    return """
    <html><body>
    <div class="results">
      <div class="tender">
        <a href="/tenders/2026/W41/812345678">Supply of Electricity to Council Buildings</a>
        <p>Buyer: Manchester City Council</p>
        <p>Value: £1.2m</p>
        <p>Closing date: 14/11/2026</p>
        <p>Published: 10 October 2026</p>
      </div>
      <div class="tender">
        <a href="/tenders/2026/W41/812345679">Half-hourly electricity supply framework</a>
        <p>Buyer: Leeds Teaching Hospitals NHS Trust</p>
      </div>
      <a href="/about">About Bidstats</a>
    </div>
    </body></html>
    """


@pytest.fixture
def search_view_listing() -> str:
    """PCS / Sell2Wales style results table."""
    return """
    <html><body>
    <table class="results">
      <tr>
        <td><a href="/search/show/search_view.aspx?ID=OCT123456">Supply of Electricity and Gas</a></td>
        <td>Published: 01/10/2026</td>
        <td>Deadline: 20/11/2026</td>
        <td>Authority: Glasgow City Council</td>
      </tr>
      <tr>
        <td><a href="/search/show/search_view.aspx?ID=OCT654321">Energy supply for leisure centres</a></td>
        <td>Published: 02/10/2026</td>
      </tr>
    </table>
    </body></html>
    """


@pytest.fixture
def d3_feed() -> str:
    return """<?xml version="1.0" encoding="UTF-8"?>
    <rss version="2.0"><channel>
      <title>Delta eSourcing tenders</title>
      <item>
        <title><![CDATA[Electricity Supply - Half Hourly Sites]]></title>
        <link>https://www.delta-esourcing.com/tenders/UK-Bolton-Electricity?advertId=abc-123</link>
        <description>&lt;p&gt;Buyer: Bolton Council&lt;/p&gt;&lt;p&gt;Closing date: 30/11/2026&lt;/p&gt;</description>
        <pubDate>Mon, 12 Oct 2026 09:00:00 GMT</pubDate>
      </item>
      <item>
        <title>Short</title>
        <link>https://www.delta-esourcing.com/tenders/x?advertId=zzz</link>
      </item>
    </channel></rss>
    """
