"""One collection pass: collect, score, and assemble the output contract."""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .adapters import BaseAdapter, default_adapters
from .analytics.aggregator import round_half_up
from .collector import collect_tenders
from .config import Config
from .models import ScoredTender, ScrapeResult, ScrapeStats
from .scorer import ScoringProfile, load_profile, score_tenders

logger = logging.getLogger(__name__)


def build_stats(
    scored: Sequence[ScoredTender],
    total_found: int,
    days: int,
    scraped_at: datetime,
) -> ScrapeStats:
    """Run counters over the full scored set (never the min-score view)."""
    eligible = [t for t in scored if not t.excluded]
    by_priority = {p: sum(1 for t in eligible if t.priority == p) for p in ("HIGH", "MEDIUM", "LOW")}
    pipeline_value = sum(t.value or 0 for t in eligible if t.priority in ("HIGH", "MEDIUM"))
    avg_score = round_half_up(sum(t.score.total for t in eligible) / len(eligible)) if eligible else 0

    return ScrapeStats(
        total_found=total_found,
        after_dedup=len(scored),
        after_exclusions=len(eligible),
        high_priority=by_priority["HIGH"],
        medium_priority=by_priority["MEDIUM"],
        low_priority=by_priority["LOW"],
        skip_count=sum(1 for t in scored if t.priority == "SKIP"),
        pipeline_count=sum(1 for t in eligible if t.is_pipeline),
        pipeline_value=float(pipeline_value),
        avg_score=avg_score,
        scraped_at=scraped_at.isoformat(),
        days_searched=days,
    )


def filter_min_score(scored: Sequence[ScoredTender], min_score: float) -> List[ScoredTender]:
    """Eligible tenders at or above min_score; everything when min_score <= 0."""
    if min_score <= 0:
        return list(scored)
    return [t for t in scored if not t.excluded and t.score.total >= min_score]


async def run_collection(
    days: Optional[int] = None,
    min_score: float = 0,
    config: Optional[Config] = None,
    profile: Optional[ScoringProfile] = None,
    adapters: Optional[Sequence[BaseAdapter]] = None,
    award_adapters: Optional[Sequence[BaseAdapter]] = None,
    now: Optional[datetime] = None,
) -> ScrapeResult:
    """Collect from every source, score, and build the ScrapeResult.

    Args:
        days: Requested lookback, clamped to [1, max_lookback_days]
        min_score: Only return eligible tenders scoring at least this much
        config: Settings (defaults to a fresh Config from the environment)
        profile: Scoring profile (defaults to config.scoring_profile_path or the built-in)
        adapters / award_adapters: Override the default source adapters
        now: Reference time for scoring and scraped_at

    Returns:
        ScrapeResult; serialize with model_dump(by_alias=True) for the JSON contract
    """
    config = config or Config()
    days = config.clamp_days(days)
    if profile is None:
        profile = load_profile(config.scoring_profile_path)
    now = now or datetime.now(timezone.utc)

    if adapters is None or award_adapters is None:
        default_tender, default_award = default_adapters(config)
        adapters = default_tender if adapters is None else adapters
        award_adapters = default_award if award_adapters is None else award_adapters

    collected = await collect_tenders(days, adapters=adapters, award_adapters=award_adapters)
    scored = score_tenders(collected.tenders, profile, now)
    stats = build_stats(scored, collected.total_found, days, now)

    logger.info(
        "run_complete days=%d found=%d after_dedup=%d eligible=%d high=%d medium=%d avg_score=%d",
        days,
        stats.total_found,
        stats.after_dedup,
        stats.after_exclusions,
        stats.high_priority,
        stats.medium_priority,
        stats.avg_score,
    )

    return ScrapeResult(
        tenders=filter_min_score(scored, min_score),
        stats=stats,
        source_health=collected.source_health,
        recent_awards=collected.recent_awards,
    )
