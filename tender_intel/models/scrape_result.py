"""ScrapeResult - the collection output contract consumed by dashboards and digests."""

from typing import List

from pydantic import Field

from .award_notice import AwardNotice, SourceHealth
from .raw_tender import ContractModel
from .scored_tender import ScoredTender


class ScrapeStats(ContractModel):
    """Run-level counters. All counts refer to one collection pass."""

    total_found: int = Field(..., description="Notices returned by all adapters before dedup")
    after_dedup: int = Field(..., description="Notices left after title+buyer dedup")
    after_exclusions: int = Field(..., description="Non-excluded tenders")
    high_priority: int = 0
    medium_priority: int = 0
    low_priority: int = 0
    skip_count: int = 0
    pipeline_count: int = 0
    pipeline_value: float = 0.0
    avg_score: int = 0
    scraped_at: str = Field(..., description="ISO timestamp of the run")
    days_searched: int = Field(..., description="Lookback window in days")


class ScrapeResult(ContractModel):
    tenders: List[ScoredTender] = Field(default_factory=list)
    stats: ScrapeStats
    source_health: List[SourceHealth] = Field(default_factory=list)
    recent_awards: List[AwardNotice] = Field(default_factory=list)
