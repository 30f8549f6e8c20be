"""Live framework intelligence from Find a Tender OCDS release packages.

Two adapters run concurrently: one looks for notices that mention each
tracked framework, the other lists awarded supply contracts with their
(known or estimated) expiry dates. Either may fail without affecting the
other; the registry is always returned.
"""

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from ..adapters.base import BaseAdapter, SourceSession
from ..adapters.ocds import iter_records
from ..adapters.parsing import first, first_text, parse_amount, strip_ocds_prefix
from ..deduplicator import Deduplicator
from ..models import ContractExpiry, FrameworkDefinition, FrameworkIntelligence, FrameworkSignal, TrackedFramework
from .registry import FRAMEWORKS, TOTAL_FRAMEWORK_VALUE
from .signals import classify_signal, days_between, detect_status

logger = logging.getLogger(__name__)

RELEASE_PACKAGES_URL = "https://www.find-tender.service.gov.uk/api/1.0/ocdsReleasePackages"
NOTICE_URL = "https://www.find-tender.service.gov.uk/Notice/{notice_id}"

TERMS_PER_FRAMEWORK = 2
MAX_SIGNALS_PER_FRAMEWORK = 5
SIGNAL_TIMEOUT_SECONDS = 15.0

EXPIRY_SEARCH_TERMS = ("electricity supply", "energy supply", "electricity framework")
# Award notices rarely carry a contract end date; assume a four-year term
ASSUMED_CONTRACT_YEARS = 4
MAX_EXPIRIES = 50
EXPIRY_HORIZON_DAYS = 180


def _notice_url(record: Dict) -> str:
    ocid = first_text(record, "ocid", "id")
    return NOTICE_URL.format(notice_id=strip_ocds_prefix(ocid))


def _first_tag(record: Dict) -> str:
    tags = record.get("tag")
    if isinstance(tags, list) and tags:
        return str(tags[0])
    return ""


class FrameworkAdapter(BaseAdapter):
    """Notices mentioning each tracked framework, classified by signal type.

    collect() returns (framework_id, FrameworkSignal) pairs.
    """

    def __init__(self, frameworks: Sequence[FrameworkDefinition] = FRAMEWORKS, **kwargs):
        kwargs.setdefault("timeout", SIGNAL_TIMEOUT_SECONDS)
        super().__init__(**kwargs)
        self.frameworks = frameworks

    @property
    def source_name(self) -> str:
        return "find-a-tender-frameworks"

    async def collect(self, session: SourceSession, days: int) -> List[Tuple[str, FrameworkSignal]]:
        pairs = []
        for framework in self.frameworks:
            signals: List[FrameworkSignal] = []
            for term in framework.search_terms[:TERMS_PER_FRAMEWORK]:
                data = await session.get_json(RELEASE_PACKAGES_URL, {"keyword": term, "size": 10})
                if data is None:
                    continue
                signals.extend(self.map_signal(record) for record in iter_records(data))
            pairs.extend((framework.id, s) for s in signals[:MAX_SIGNALS_PER_FRAMEWORK])
            logger.debug("[%s] framework=%s signals=%d", self.source_name, framework.id, len(signals))
        return pairs

    def map_signal(self, record: Dict) -> FrameworkSignal:
        title = first_text(record, "tender.title", "title")
        return FrameworkSignal(
            title=title,
            url=_notice_url(record),
            date=first_text(record, "datePublished", "date"),
            type=classify_signal(title, _first_tag(record)),
        )


class ContractExpiryAdapter(BaseAdapter):
    """Awarded supply contracts with their contract end (or estimated end) date."""

    def __init__(self, now: Optional[datetime] = None, **kwargs):
        super().__init__(**kwargs)
        self.now = now or datetime.now(timezone.utc)

    @property
    def source_name(self) -> str:
        return "find-a-tender-expiries"

    async def collect(self, session: SourceSession, days: int) -> List[ContractExpiry]:
        expiries: List[ContractExpiry] = []
        for term in EXPIRY_SEARCH_TERMS:
            data = await session.get_json(
                RELEASE_PACKAGES_URL,
                {"keyword": term, "stage": "award", "size": 50},
            )
            if data is None:
                continue
            for record in iter_records(data):
                expiries.extend(self.map_expiries(record))
        return expiries

    def map_expiries(self, record: Dict) -> List[ContractExpiry]:
        awards = record.get("awards")
        if not isinstance(awards, list):
            return []

        ocid = first_text(record, "ocid", "id")
        title = first_text(record, "tender.title", "title")
        buyer = first_text(record, "buyer.name")
        region = first_text(record, "tender.deliveryAddresses.0.region", "tender.deliveryAddresses.0.locality")

        expiries = []
        for award in awards:
            if not isinstance(award, dict):
                continue
            try:
                award_date = first_text(award, "date") or first_text(record, "datePublished")
                end_date = first_text(award, "contractPeriod.endDate") or None
                estimated = None if end_date else estimate_expiry(award_date)
                expiries.append(ContractExpiry(
                    id=f"expiry-{ocid}-{first_text(award, 'id')}",
                    title=title,
                    buyer=buyer,
                    value=parse_amount(first(award, "value.amount")),
                    award_date=award_date,
                    expiry_date=end_date,
                    estimated_expiry_date=estimated,
                    region=region,
                    url=_notice_url(record),
                    days_until_expiry=days_between(end_date or estimated, self.now),
                ))
            except Exception as e:
                logger.error("[%s] Error normalizing award: %s", self.source_name, e)
        return expiries


def estimate_expiry(award_date: str) -> Optional[str]:
    """Award date plus the assumed contract term, as YYYY-MM-DD."""
    if not award_date:
        return None
    try:
        awarded = date.fromisoformat(award_date[:10])
    except ValueError:
        return None
    year = awarded.year + ASSUMED_CONTRACT_YEARS
    try:
        return awarded.replace(year=year).isoformat()
    except ValueError:
        # 29 February in a non-leap target year
        return awarded.replace(year=year, day=28).isoformat()


def rank_expiries(expiries: Sequence[ContractExpiry]) -> List[ContractExpiry]:
    """Deduplicate by title|buyer, drop undated contracts, soonest expiry first."""
    unique = Deduplicator().deduplicate(expiries)
    dated = [e for e in unique if e.days_until_expiry is not None]
    return sorted(dated, key=lambda e: e.days_until_expiry)


async def get_framework_intelligence(
    now: Optional[datetime] = None,
    frameworks: Sequence[FrameworkDefinition] = FRAMEWORKS,
    signal_adapter: Optional[BaseAdapter] = None,
    expiry_adapter: Optional[BaseAdapter] = None,
) -> FrameworkIntelligence:
    """Tracked frameworks with live status, plus upcoming contract expiries."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    signal_adapter = signal_adapter or FrameworkAdapter(frameworks)
    expiry_adapter = expiry_adapter or ContractExpiryAdapter(now=now)

    signal_run, expiry_run = await asyncio.gather(signal_adapter.run(0), expiry_adapter.run(0))

    signals_by_framework: Dict[str, List[FrameworkSignal]] = {}
    for framework_id, signal in signal_run.items:
        signals_by_framework.setdefault(framework_id, []).append(signal)

    tracked = []
    for framework in frameworks:
        signals = signals_by_framework.get(framework.id, [])
        tracked.append(TrackedFramework(
            **framework.model_dump(),
            search_terms=framework.search_terms,
            fts_signals=signals,
            current_status=detect_status(framework, signals, now),
        ))

    expiries = rank_expiries(expiry_run.items)
    expiring_soon = sum(1 for e in expiries if 0 < e.days_until_expiry <= EXPIRY_HORIZON_DAYS)
    upcoming = sum(1 for f in tracked if f.current_status in ("re-procuring", "expiring-soon"))

    logger.info(
        "framework_intelligence frameworks=%d expiries=%d upcoming_reprocurements=%d",
        len(tracked),
        len(expiries),
        upcoming,
    )

    return FrameworkIntelligence(
        frameworks=tracked,
        contract_expiries=expiries[:MAX_EXPIRIES],
        upcoming_reprocurements=upcoming,
        expiring_next_6_months=expiring_soon,
        total_framework_value=TOTAL_FRAMEWORK_VALUE,
    )
