"""Shared scraping adapter for portals with no API (HTML listings and RSS feeds).

Extraction is deliberately tolerant: notices are found by matching link
hrefs against a per-portal pattern, and buyer / value / dates are pulled out
of the text surrounding each link. Malformed markup yields fewer notices,
never an exception; zero matches is a successful empty result.
"""

import hashlib
import html
import logging
import re
from email.utils import parsedate_to_datetime
from re import Pattern
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..models import RawTender
from .base import BaseAdapter, SourceSession
from .parsing import clean_text, find_date, find_labelled, parse_date_text, parse_money

logger = logging.getLogger(__name__)

SCRAPE_QUERIES = (
    "electricity supply",
    "supply of electricity",
    "energy supply",
)

BUYER_LABELS = (
    r"buyer",
    r"organi[sz]ation",
    r"contracting\s+authority",
    r"authority",
    r"published\s+by",
)
DEADLINE_LABELS = (
    r"closing\s+date",
    r"deadline(?:\s+date)?",
    r"tender\s+deadline",
    r"closes",
    r"response\s+by",
)
PUBLISHED_LABELS = (
    r"date\s+published",
    r"published(?:\s+on)?",
    r"publication\s+date",
    r"posted",
)
LOCATION_LABELS = (
    r"location",
    r"region",
    r"place\s+of\s+performance",
)

_ITEM_RE = re.compile(r"<item\b[^>]*>(.*?)</item>", re.IGNORECASE | re.DOTALL)
_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)

MIN_TITLE_LENGTH = 8
MAX_DESCRIPTION_LENGTH = 600


class PortalScrapeAdapter(BaseAdapter):
    """Scrape a portal's search page (or RSS feed) once per query.

    Subclasses set the search endpoint, the href pattern that identifies a
    notice link, and optionally a default location for regional portals.
    """

    BASE_URL = ""
    SEARCH_URL = ""
    QUERY_PARAM = "q"
    EXTRA_PARAMS: Dict[str, Any] = {}
    LINK_RE: Pattern = re.compile(r"$^")
    # First group is the portal's native notice id
    ID_RE: Optional[Pattern] = None
    ID_PREFIX = ""
    DEFAULT_LOCATION = ""
    FEED = False
    QUERIES: Tuple[str, ...] = SCRAPE_QUERIES

    def search_params(self, query: str) -> Dict[str, Any]:
        return {self.QUERY_PARAM: query, **self.EXTRA_PARAMS}

    async def collect(self, session: SourceSession, days: int) -> List[RawTender]:
        notices: Dict[str, RawTender] = {}
        for query in self.QUERIES:
            markup = await session.get_text(self.SEARCH_URL, self.search_params(query))
            if not markup:
                continue
            parsed = self.parse_feed(markup) if self.FEED else self.parse_listing(markup)
            logger.debug("[%s] query=%r matched %d notices", self.source_name, query, len(parsed))
            for notice in parsed:
                notices.setdefault(notice.id, notice)

        logger.info("Normalized %d notices from %s", len(notices), self.source_name)
        return list(notices.values())

    # ------------------------------------------------------------------
    # HTML listings
    # ------------------------------------------------------------------
    def parse_listing(self, markup: str) -> List[RawTender]:
        """Extract notices from an HTML search results page."""
        try:
            soup = BeautifulSoup(markup, "html.parser")
        except Exception as exc:
            logger.warning("[%s] unparseable listing: %s", self.source_name, exc)
            return []

        notices = []
        for anchor in soup.find_all("a", href=True):
            href = anchor.get("href") or ""
            if not self.LINK_RE.search(href):
                continue
            title = clean_text(anchor.get_text(" "))
            if len(title) < MIN_TITLE_LENGTH:
                continue
            url = urljoin(self.BASE_URL, href)
            context = self._context_text(anchor)
            notice = self.build_notice(url, title, context)
            if notice is not None:
                notices.append(notice)
        return notices

    def _context_text(self, anchor) -> str:
        """Text of the widest ancestor that still holds only this notice link."""
        node = anchor
        for _ in range(5):
            parent = node.parent
            if parent is None or parent.name in ("body", "html", "[document]"):
                break
            links = [a for a in parent.find_all("a", href=True) if self.LINK_RE.search(a.get("href") or "")]
            if len(links) > 1:
                break
            node = parent
        return node.get_text("\n", strip=True)

    # ------------------------------------------------------------------
    # RSS feeds
    # ------------------------------------------------------------------
    def parse_feed(self, markup: str) -> List[RawTender]:
        """Extract notices from RSS <item> blocks with tolerant regexes."""
        notices = []
        for block in _ITEM_RE.findall(markup or ""):
            title = _feed_field(block, "title")
            link = _feed_field(block, "link") or _feed_field(block, "guid")
            if len(title) < MIN_TITLE_LENGTH or not link:
                continue
            description = _feed_field(block, "description")
            notice = self.build_notice(
                urljoin(self.BASE_URL, link),
                title,
                description,
                published=_rfc822_date(_feed_field(block, "pubDate")),
            )
            if notice is not None:
                notices.append(notice)
        return notices

    # ------------------------------------------------------------------
    # Shared mapping
    # ------------------------------------------------------------------
    def native_id(self, url: str) -> str:
        if self.ID_RE is not None:
            match = self.ID_RE.search(url)
            if match:
                return re.sub(r"[^\w-]+", "-", match.group(1)).strip("-")
        return hashlib.sha256(url.encode()).hexdigest()[:16]

    def build_notice(
        self,
        url: str,
        title: str,
        context: str,
        published: Optional[str] = None,
    ) -> Optional[RawTender]:
        """Build a RawTender from a link and the text around it."""
        try:
            description = clean_text(context.replace(title, " ", 1))[:MAX_DESCRIPTION_LENGTH]
            return RawTender(
                id=f"{self.ID_PREFIX}{self.native_id(url)}",
                source=self.source_name,
                url=url,
                title=title,
                description=description,
                buyer=find_labelled(context, BUYER_LABELS),
                location=find_labelled(context, LOCATION_LABELS) or self.DEFAULT_LOCATION,
                published_date=published or find_date(context, PUBLISHED_LABELS) or "",
                deadline_date=find_date(context, DEADLINE_LABELS),
                value=parse_money(context),
            )
        except Exception as e:
            logger.error("[%s] Error building notice from %s: %s", self.source_name, url, e)
            return None


def _feed_field(block: str, name: str) -> str:
    match = re.search(rf"<{name}\b[^>]*>(.*?)</{name}>", block, re.IGNORECASE | re.DOTALL)
    if not match:
        return ""
    raw = _CDATA_RE.sub(r"\1", match.group(1)).strip()
    if "<" not in raw and "&" not in raw:
        return clean_text(raw)
    # Descriptions are often entity-escaped HTML
    text = html.unescape(raw) if "&lt;" in raw else raw
    return BeautifulSoup(text, "html.parser").get_text("\n", strip=True)


def _rfc822_date(value: str) -> Optional[str]:
    if not value:
        return None
    try:
        return parsedate_to_datetime(value).date().isoformat()
    except (TypeError, ValueError):
        return parse_date_text(value)
