"""Shared OCDS (Open Contracting Data Standard) search adapter.

Find a Tender and Contracts Finder both publish OCDS-flavoured JSON, but the
envelope and field names drift between endpoints and over time. The mapping
below therefore looks every field up along several candidate paths.
"""

import logging
import re
from abc import abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..models import RawTender
from .base import BaseAdapter, FALLBACK_KEYWORDS, SourceSession, days_ago_iso
from .parsing import dig, first, first_text, parse_amount, unique

logger = logging.getLogger(__name__)

CPV_ELECTRICITY = "09310000"

_PIPELINE_TITLE_RE = re.compile(
    r"(?i:prior\s+information|market\s+engagement|pre[\s-]?market|planned\s+procurement)|\bPIN\b"
)


class OcdsSearchAdapter(BaseAdapter):
    """Search an OCDS notice API by CPV code, falling back to a keyword sweep.

    Subclasses set the endpoint, id prefix and query parameter names.
    """

    SEARCH_URL = ""
    NOTICE_URL = ""
    ID_PREFIX = ""
    ID_PATHS: Tuple[str, ...] = ("id", "noticeId", "ocid")

    @abstractmethod
    def cpv_params(self, since: str) -> Dict[str, Any]:
        """Query params for the CPV-code search."""

    @abstractmethod
    def keyword_params(self, keyword: str, since: str) -> Dict[str, Any]:
        """Query params for one fallback keyword search."""

    async def collect(self, session: SourceSession, days: int) -> List[RawTender]:
        since = days_ago_iso(days)
        tenders: Dict[str, RawTender] = {}

        await self._search(session, self.cpv_params(since), tenders)

        # Keyword fallback - only if CPV returned nothing
        if not tenders:
            logger.info("[%s] CPV search empty, sweeping %d keywords", self.source_name, len(FALLBACK_KEYWORDS))
            for keyword in FALLBACK_KEYWORDS:
                await self._search(session, self.keyword_params(keyword, since), tenders)

        logger.info("Normalized %d notices from %s", len(tenders), self.source_name)
        return list(tenders.values())

    async def _search(
        self,
        session: SourceSession,
        params: Dict[str, Any],
        tenders: Dict[str, RawTender],
    ) -> None:
        """Run one query, following the next-link cursor up to max_pages."""
        url: Optional[str] = self.SEARCH_URL
        page_params: Optional[Dict[str, Any]] = params

        for page in range(1, self.max_pages + 1):
            data = await session.get_json(url, page_params)
            if data is None:
                return

            for record in iter_records(data):
                tender = self.map_record(record)
                if tender is not None and tender.id not in tenders:
                    tenders[tender.id] = tender

            next_link = first(data, "links.next", "next", "nextCursor", "cursor") if isinstance(data, dict) else None
            if not isinstance(next_link, str) or not next_link:
                return
            if next_link.startswith("http"):
                url, page_params = next_link, None
            else:
                page_params = {**params, "cursor": next_link}

        logger.info("[%s] page cap (%d) reached for %s", self.source_name, self.max_pages, params)

    def map_record(self, record: Dict[str, Any]) -> Optional[RawTender]:
        """Map a release or flat notice to RawTender. Returns None if unusable."""
        try:
            native_id = first_text(record, *self.ID_PATHS)
            if not native_id:
                logger.warning("[%s] notice missing ID, skipping", self.source_name)
                return None

            return RawTender(
                id=f"{self.ID_PREFIX}{native_id}",
                source=self.source_name,
                url=self.NOTICE_URL.format(notice_id=native_id),
                title=first_text(record, "tender.title", "title", "name"),
                description=first_text(record, "tender.description", "description", "summary"),
                buyer=first_text(record, "buyer.name", "organisationName", "buyer", "parties.0.name"),
                location=first_text(
                    record,
                    "tender.deliveryAddresses.0.region",
                    "tender.items.0.deliveryAddresses.0.region",
                    "tender.deliveryLocations.0.description",
                    "region",
                    "location",
                    "placeOfPerformance",
                    "buyer.address.region",
                ),
                published_date=first_text(record, "datePublished", "publishedDate", "date"),
                deadline_date=first_text(
                    record,
                    "tender.tenderPeriod.endDate",
                    "deadlineDate",
                    "submissionDeadline",
                    "tenderPeriod.endDate",
                ) or None,
                value=parse_amount(first(
                    record,
                    "tender.value.amount",
                    "value.amount",
                    "value.max",
                    "estimatedValue.amount",
                    "tender.minValue.amount",
                    "value",
                )),
                cpv_codes=extract_cpv_codes(record),
                is_pipeline=is_pipeline_release(record),
            )
        except Exception as e:
            logger.error("[%s] Error normalizing notice: %s", self.source_name, e)
            return None


def iter_records(data: Any) -> Iterator[Dict[str, Any]]:
    """Yield releases/notices from any of the envelopes the APIs return.

    Handles a bare list, {"releases"|"results"|"notices"|"data": [...]}, and
    release packages that nest their own "releases" list.
    """
    if isinstance(data, list):
        items = data
    elif isinstance(data, dict):
        items = first(data, "releases", "results", "notices", "data", "releasePackages", default=[])
    else:
        items = []
    if not isinstance(items, list):
        return

    for item in items:
        if not isinstance(item, dict):
            continue
        nested = item.get("releases")
        if isinstance(nested, list):
            for release in nested:
                if isinstance(release, dict):
                    yield release
        else:
            yield item


def extract_cpv_codes(record: Dict[str, Any]) -> List[str]:
    codes: List[str] = []
    items = dig(record, "tender.items")
    if isinstance(items, list):
        for item in items:
            classification = dig(item, "classification.id")
            if classification:
                codes.append(str(classification))
            extra = dig(item, "additionalClassifications")
            if isinstance(extra, list):
                codes.extend(
                    str(c.get("id")) for c in extra
                    if isinstance(c, dict) and c.get("id") and str(c.get("scheme", "CPV")).upper() == "CPV"
                )
    main = dig(record, "tender.classification.id")
    if main:
        codes.insert(0, str(main))

    flat = record.get("cpvCodes")
    if isinstance(flat, list):
        codes.extend(str(c) for c in flat)
    elif isinstance(flat, (str, int)) and flat:
        codes.append(str(flat))
    return unique(codes)


def is_pipeline_release(record: Dict[str, Any]) -> bool:
    """Planning-stage releases are pipeline signals rather than live tenders."""
    tags = record.get("tag")
    if isinstance(tags, str):
        tags = [tags]
    if isinstance(tags, list) and any(str(t).lower().startswith("planning") for t in tags):
        return True
    if str(dig(record, "tender.status") or "").lower() == "planned":
        return True
    title = first_text(record, "tender.title", "title", "name")
    return bool(_PIPELINE_TITLE_RE.search(title))
