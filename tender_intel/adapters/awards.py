"""Contracts Finder award history - market intelligence, not scored."""

import logging
from typing import Any, Dict, List, Optional

from ..models import AwardNotice
from .base import BaseAdapter, FALLBACK_KEYWORDS, SourceSession, days_ago_iso
from .ocds import iter_records
from .parsing import first, first_text, parse_amount

logger = logging.getLogger(__name__)

AWARD_LOOKBACK_DAYS = 180


class ContractsFinderAwardsAdapter(BaseAdapter):
    """Award-stage releases from Contracts Finder for the supply keywords.

    Health-only: the run is reported ok whenever the source answered, even
    with no awards, because awards are not part of the tender feed.
    """

    health_only = True

    SEARCH_URL = "https://www.contractsfinder.service.gov.uk/Published/Notices/OCDS/Search"
    NOTICE_URL = "https://www.contractsfinder.service.gov.uk/Notice/{notice_id}"

    def __init__(self, lookback_days: int = AWARD_LOOKBACK_DAYS, **kwargs):
        super().__init__(**kwargs)
        self.lookback_days = lookback_days

    @property
    def source_name(self) -> str:
        return "contracts-finder-awards"

    async def collect(self, session: SourceSession, days: int) -> List[AwardNotice]:
        # Award history looks further back than the tender window
        since = days_ago_iso(max(days, self.lookback_days))
        awards: List[AwardNotice] = []
        for keyword in FALLBACK_KEYWORDS:
            data = await session.get_json(
                self.SEARCH_URL,
                {"q": keyword, "stages": "award", "publishedFrom": since, "size": 50},
            )
            if data is None:
                continue
            for record in iter_records(data):
                awards.extend(self.map_awards(record))

        logger.info("Normalized %d awards from %s", len(awards), self.source_name)
        return awards

    def map_awards(self, record: Dict[str, Any]) -> List[AwardNotice]:
        """One AwardNotice per award in a release. Bad records yield nothing."""
        try:
            award_list = record.get("awards")
            if not isinstance(award_list, list) or not award_list:
                return []

            ocid = first_text(record, "ocid", "id")
            title = first_text(record, "tender.title", "title")
            buyer = first_text(record, "buyer.name", "parties.0.name")
            region = first_text(
                record,
                "tender.deliveryAddresses.0.region",
                "tender.items.0.deliveryAddresses.0.region",
                "buyer.address.region",
            )
            published = first_text(record, "datePublished", "date")

            notices = []
            for award in award_list:
                if not isinstance(award, dict):
                    continue
                notice = self._map_award(award, ocid, title, buyer, region, published)
                if notice is not None:
                    notices.append(notice)
            return notices
        except Exception as e:
            logger.error("[%s] Error normalizing award: %s", self.source_name, e)
            return []

    def _map_award(
        self,
        award: Dict[str, Any],
        ocid: str,
        title: str,
        buyer: str,
        region: str,
        published: str,
    ) -> Optional[AwardNotice]:
        award_title = title or first_text(award, "title")
        if not award_title:
            return None
        return AwardNotice(
            title=award_title,
            buyer=buyer,
            winner=first_text(award, "suppliers.0.name"),
            value=parse_amount(first(award, "value.amount", "value")),
            award_date=first_text(award, "date") or published,
            region=region,
            url=self.NOTICE_URL.format(notice_id=ocid) if ocid else "",
        )

