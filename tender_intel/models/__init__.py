"""Shared Pydantic models - the data contract between pipeline stages."""

from .raw_tender import ContractModel, RawTender, SourceTag
from .scored_tender import (
    EffortEstimate,
    Priority,
    Recommendation,
    ScoreBreakdown,
    ScoredTender,
)
from .award_notice import AwardNotice, SourceHealth
from .scrape_result import ScrapeResult, ScrapeStats
from .analytics import (
    AnalyticsData,
    BuyerTypeData,
    InsightCard,
    ProcurementRouteData,
    RegionData,
    SourceBreakdownData,
    TimelineEntry,
    ValueBand,
)
from .framework import (
    ContractExpiry,
    FrameworkDefinition,
    FrameworkIntelligence,
    FrameworkSignal,
    TrackedFramework,
)

__all__ = [
    "ContractModel",
    "RawTender",
    "SourceTag",
    "EffortEstimate",
    "Priority",
    "Recommendation",
    "ScoreBreakdown",
    "ScoredTender",
    "AwardNotice",
    "SourceHealth",
    "ScrapeResult",
    "ScrapeStats",
    "AnalyticsData",
    "BuyerTypeData",
    "InsightCard",
    "ProcurementRouteData",
    "RegionData",
    "SourceBreakdownData",
    "TimelineEntry",
    "ValueBand",
    "ContractExpiry",
    "FrameworkDefinition",
    "FrameworkIntelligence",
    "FrameworkSignal",
    "TrackedFramework",
]
