"""Analytics payload models derived from a batch of scored tenders."""

from typing import List, Literal

from .raw_tender import ContractModel


class RegionData(ContractModel):
    region: str
    count: int
    total_value: float


class ProcurementRouteData(ContractModel):
    route: str
    count: int
    avg_score: int


class ValueBand(ContractModel):
    band: str
    count: int
    is_sweet: bool


class TimelineEntry(ContractModel):
    week: str
    count: int


class BuyerTypeData(ContractModel):
    type: str
    count: int
    total_value: float


class InsightCard(ContractModel):
    text: str
    type: Literal["positive", "neutral", "action"]


class SourceBreakdownData(ContractModel):
    source: str
    count: int


class AnalyticsData(ContractModel):
    regions: List[RegionData]
    procurement_routes: List[ProcurementRouteData]
    value_bands: List[ValueBand]
    timeline: List[TimelineEntry]
    buyer_types: List[BuyerTypeData]
    insights: List[InsightCard]
    source_breakdown: List[SourceBreakdownData]
