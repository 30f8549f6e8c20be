"""Scrape adapters for the UK portals that publish no usable API."""

import re

from .scrape import PortalScrapeAdapter


class BidstatsAdapter(PortalScrapeAdapter):
    """Bidstats aggregator search results.

    Notice links look like /tenders/2026/W41/812345678.
    """

    BASE_URL = "https://bidstats.uk"
    SEARCH_URL = "https://bidstats.uk/tenders/"
    QUERY_PARAM = "q"
    LINK_RE = re.compile(r"/tenders/\d{4}/W\d{2}/\d+")
    ID_RE = re.compile(r"/tenders/\d{4}/W\d{2}/(\d+)")
    ID_PREFIX = "bs-"

    @property
    def source_name(self) -> str:
        return "bidstats"


class PcsAdapter(PortalScrapeAdapter):
    """Public Contracts Scotland keyword search."""

    BASE_URL = "https://www.publiccontractsscotland.gov.uk"
    SEARCH_URL = "https://www.publiccontractsscotland.gov.uk/search/Search_MainPage.aspx"
    QUERY_PARAM = "SearchFilter"
    LINK_RE = re.compile(r"search_view\.aspx\?ID=", re.IGNORECASE)
    ID_RE = re.compile(r"[?&]ID=([A-Za-z0-9]+)", re.IGNORECASE)
    ID_PREFIX = "pcs-"
    DEFAULT_LOCATION = "Scotland"

    @property
    def source_name(self) -> str:
        return "pcs"


class Sell2WalesAdapter(PortalScrapeAdapter):
    """Sell2Wales keyword search."""

    BASE_URL = "https://www.sell2wales.gov.wales"
    SEARCH_URL = "https://www.sell2wales.gov.wales/search/Search_MainPage.aspx"
    QUERY_PARAM = "SearchFilter"
    LINK_RE = re.compile(r"search_view\.aspx\?ID=", re.IGNORECASE)
    ID_RE = re.compile(r"[?&]ID=([A-Za-z0-9]+)", re.IGNORECASE)
    ID_PREFIX = "s2w-"
    DEFAULT_LOCATION = "Wales"

    @property
    def source_name(self) -> str:
        return "sell2wales"


class D3TendersAdapter(PortalScrapeAdapter):
    """Delta eSourcing (D3 Tenders) RSS feed."""

    BASE_URL = "https://www.delta-esourcing.com"
    SEARCH_URL = "https://www.delta-esourcing.com/delta/rss/tenders.html"
    QUERY_PARAM = "keywords"
    ID_RE = re.compile(r"(?:advertId|noticeId|id)=([A-Za-z0-9-]+)", re.IGNORECASE)
    ID_PREFIX = "d3-"
    FEED = True

    @property
    def source_name(self) -> str:
        return "d3-tenders"


class TheChestAdapter(PortalScrapeAdapter):
    """The Chest (North West ProContract portal) opportunity listings."""

    BASE_URL = "https://procontract.due-north.com"
    SEARCH_URL = "https://procontract.due-north.com/Opportunities/Index"
    QUERY_PARAM = "SearchText"
    LINK_RE = re.compile(r"advertId=", re.IGNORECASE)
    ID_RE = re.compile(r"advertId=([A-Za-z0-9-]+)", re.IGNORECASE)
    ID_PREFIX = "chest-"
    DEFAULT_LOCATION = "North West"

    @property
    def source_name(self) -> str:
        return "the-chest"
