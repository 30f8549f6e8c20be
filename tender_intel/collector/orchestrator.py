"""Concurrent collection across every source adapter."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..adapters import BaseAdapter, SourceRun, default_adapters
from ..deduplicator import dedup_awards, dedup_tenders
from ..models import AwardNotice, RawTender, SourceHealth

logger = logging.getLogger(__name__)


@dataclass
class CollectionResult:
    """Merged, deduplicated output of one collection pass."""

    tenders: List[RawTender] = field(default_factory=list)
    source_health: List[SourceHealth] = field(default_factory=list)
    recent_awards: List[AwardNotice] = field(default_factory=list)
    # Notices across all sources before cross-source dedup
    total_found: int = 0


async def _run_all(adapters: Sequence[BaseAdapter], days: int) -> List[SourceRun]:
    """Run adapters concurrently; results come back in declared order."""
    outcomes = await asyncio.gather(
        *(adapter.run(days) for adapter in adapters),
        return_exceptions=True,
    )
    runs = []
    for adapter, outcome in zip(adapters, outcomes):
        if isinstance(outcome, BaseException):
            # run() already isolates failures; this catches anything that slipped past it
            logger.error(
                "fetch_complete source=%s result=failure error='%s'",
                adapter.source_name,
                outcome,
            )
            runs.append(SourceRun(items=[], ok=False, error=str(outcome)))
        else:
            runs.append(outcome)
    return runs


def _health(adapter: BaseAdapter, run: SourceRun) -> SourceHealth:
    count = len(run.items)
    ok = run.ok if adapter.health_only else run.ok and count >= 1
    return SourceHealth(name=adapter.source_name, ok=ok, count=count)


async def collect_tenders(
    days: int,
    adapters: Optional[Sequence[BaseAdapter]] = None,
    award_adapters: Optional[Sequence[BaseAdapter]] = None,
) -> CollectionResult:
    """Fetch from every source concurrently, merge and deduplicate.

    Never raises: a source that fails outright is reported in source_health
    with ok=False and count=0 and contributes nothing.

    Args:
        days: Lookback window in days
        adapters: Tender adapters in merge order (defaults to every portal)
        award_adapters: Award-history adapters (default: Contracts Finder awards)

    Returns:
        CollectionResult with tenders merged in declared adapter order
    """
    if adapters is None or award_adapters is None:
        default_tender, default_award = default_adapters()
        adapters = default_tender if adapters is None else adapters
        award_adapters = default_award if award_adapters is None else award_adapters

    start = time.monotonic()
    logger.info("collection_start sources=%d days=%d", len(adapters) + len(award_adapters), days)

    all_adapters = list(adapters) + list(award_adapters)
    runs = await _run_all(all_adapters, days)
    tender_runs = runs[: len(adapters)]
    award_runs = runs[len(adapters):]

    source_health = [_health(adapter, run) for adapter, run in zip(all_adapters, runs)]

    merged: List[RawTender] = []
    for run in tender_runs:
        if run.ok:
            merged.extend(run.items)
    tenders = dedup_tenders(merged)

    award_items: List[AwardNotice] = []
    for run in award_runs:
        if run.ok:
            award_items.extend(run.items)
    recent_awards = dedup_awards(award_items)

    failed = [h.name for h in source_health if not h.ok]
    logger.info(
        "collection_complete found=%d after_dedup=%d awards=%d failed_sources=%s duration_ms=%.0f",
        len(merged),
        len(tenders),
        len(recent_awards),
        ",".join(failed) or "none",
        (time.monotonic() - start) * 1000,
    )

    return CollectionResult(
        tenders=tenders,
        source_health=source_health,
        recent_awards=recent_awards,
        total_found=len(merged),
    )
