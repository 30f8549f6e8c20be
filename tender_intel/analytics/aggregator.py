"""Batch analytics over scored tenders for the dashboard's insight views.

Everything here works on eligible (non-excluded) tenders only, except the
source breakdown, which counts every tender a source returned.
"""

import math
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from ..models import (
    AnalyticsData,
    BuyerTypeData,
    InsightCard,
    ProcurementRouteData,
    RegionData,
    ScoredTender,
    SourceBreakdownData,
    TimelineEntry,
    ValueBand,
)
from ..scorer.engine import days_until, parse_deadline
from ..scorer.profile import DEFAULT_PROFILE, ScoringProfile
from ..scorer.recommend import format_value

SOURCE_LABELS: Dict[str, str] = {
    "find-a-tender": "Find a Tender",
    "contracts-finder": "Contracts Finder",
    "bidstats": "Bidstats",
    "pcs": "PCS (Scotland)",
    "sell2wales": "Sell2Wales",
    "d3-tenders": "D3 Tenders",
    "the-chest": "The Chest (NW)",
}

# (label, lower bound inclusive, upper bound exclusive, sweet spot)
VALUE_BANDS: Tuple[Tuple[str, float, float, bool], ...] = (
    ("Under £100k", 0, 100_000, False),
    ("£100k-500k", 100_000, 500_000, False),
    ("£500k-2m", 500_000, 2_000_000, True),
    ("£2m-5m", 2_000_000, 5_000_000, True),
    ("£5m+", 5_000_000, math.inf, False),
)
UNDISCLOSED_BAND = "Undisclosed"

SWEET_SPOT_MIN = 500_000
SWEET_SPOT_MAX = 5_000_000

CALLOFF_ROUTES = ("Framework Call-off", "Further Competition", "Direct Award")
CLOSING_SOON_DAYS = 14

TIMELINE_WEEKS = 4
TIMELINE_MONTHS = 18
# Months after this are listed only when something is due in them
TIMELINE_FIXED_MONTHS = 6

MAX_INSIGHTS = 4

_MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def compute_regions(tenders: Sequence[ScoredTender]) -> List[RegionData]:
    counts: Counter = Counter()
    values: Dict[str, float] = {}
    for t in tenders:
        region = t.region or "Not Specified"
        counts[region] += 1
        values[region] = values.get(region, 0.0) + (t.value or 0)
    rows = [RegionData(region=r, count=counts[r], total_value=values[r]) for r in counts]
    return sorted(rows, key=lambda row: row.count, reverse=True)


def compute_procurement_routes(tenders: Sequence[ScoredTender]) -> List[ProcurementRouteData]:
    counts: Counter = Counter()
    totals: Dict[str, int] = {}
    for t in tenders:
        counts[t.procurement_route] += 1
        totals[t.procurement_route] = totals.get(t.procurement_route, 0) + t.score.total
    rows = [
        ProcurementRouteData(route=r, count=counts[r], avg_score=round_half_up(totals[r] / counts[r]))
        for r in counts
    ]
    return sorted(rows, key=lambda row: row.count, reverse=True)


def compute_value_bands(tenders: Sequence[ScoredTender]) -> List[ValueBand]:
    bands = []
    for label, low, high, sweet in VALUE_BANDS:
        count = sum(1 for t in tenders if t.value is not None and low <= t.value < high)
        bands.append(ValueBand(band=label, count=count, is_sweet=sweet))
    undisclosed = sum(1 for t in tenders if not t.value)
    bands.append(ValueBand(band=UNDISCLOSED_BAND, count=undisclosed, is_sweet=False))
    return bands


def _month_start(year: int, month: int, offset: int) -> datetime:
    index = (month - 1) + offset
    return datetime(year + index // 12, index % 12 + 1, 1, tzinfo=timezone.utc)


def compute_timeline(tenders: Sequence[ScoredTender], now: datetime) -> List[TimelineEntry]:
    """Deadlines per week for four weeks, then per calendar month."""
    deadlines = [d for d in (parse_deadline(t.deadline_date) for t in tenders) if d is not None]

    def count_between(start: datetime, end: datetime) -> int:
        return sum(1 for d in deadlines if start <= d < end)

    entries = []
    for i in range(TIMELINE_WEEKS):
        start = now + timedelta(days=7 * i)
        label = "This week" if i == 0 else "Next week" if i == 1 else f"Week {i + 1}"
        entries.append(TimelineEntry(week=label, count=count_between(start, start + timedelta(days=7))))

    for m in range(1, TIMELINE_MONTHS + 1):
        start = _month_start(now.year, now.month, m)
        end = _month_start(now.year, now.month, m + 1)
        count = count_between(start, end)
        if count > 0 or m <= TIMELINE_FIXED_MONTHS:
            entries.append(TimelineEntry(week=f"{_MONTH_NAMES[start.month - 1]} {start.year}", count=count))

    return entries


def compute_buyer_types(tenders: Sequence[ScoredTender]) -> List[BuyerTypeData]:
    counts: Counter = Counter()
    values: Dict[str, float] = {}
    for t in tenders:
        counts[t.buyer_type] += 1
        values[t.buyer_type] = values.get(t.buyer_type, 0.0) + (t.value or 0)
    rows = [BuyerTypeData(type=b, count=counts[b], total_value=values[b]) for b in counts]
    return sorted(rows, key=lambda row: row.total_value, reverse=True)


def generate_insights(
    tenders: Sequence[ScoredTender],
    regions: Sequence[RegionData],
    buyer_types: Sequence[BuyerTypeData],
    now: datetime,
    home_region: str = DEFAULT_PROFILE.home_region,
) -> List[InsightCard]:
    """Up to four headline cards, in a fixed order of importance."""
    insights: List[InsightCard] = []
    total = len(tenders)
    if total == 0:
        return insights

    if regions:
        top = regions[0]
        pct = round_half_up(top.count / total * 100)
        is_home = top.region == home_region
        suffix = " - your strongest region" if is_home else ""
        insights.append(InsightCard(
            text=f"{pct}% of current opportunities are in {top.region}{suffix}",
            type="positive" if is_home else "neutral",
        ))

    closing_soon = 0
    for t in tenders:
        if t.excluded or t.procurement_route not in CALLOFF_ROUTES:
            continue
        days_left = days_until(t.deadline_date, now)
        if days_left is not None and 0 < days_left <= CLOSING_SOON_DAYS:
            closing_soon += 1
    if closing_soon:
        insights.append(InsightCard(
            text=(
                f"{closing_soon} framework {_plural(closing_soon, 'call-off', 'call-offs')} closing in the "
                f"next {CLOSING_SOON_DAYS} days - low effort, high win probability"
            ),
            type="action",
        ))

    if buyer_types and buyer_types[0].total_value > 0:
        top_buyer = buyer_types[0]
        name = top_buyer.type if top_buyer.type.endswith("s") else f"{top_buyer.type}s"
        insights.append(InsightCard(
            text=f"{name} represent {format_value(top_buyer.total_value)} in pipeline value",
            type="neutral",
        ))

    sweet_spot = sum(
        1 for t in tenders
        if not t.excluded and t.value is not None and SWEET_SPOT_MIN <= t.value <= SWEET_SPOT_MAX
    )
    if sweet_spot:
        insights.append(InsightCard(
            text=(
                f"{sweet_spot} {_plural(sweet_spot, 'tender', 'tenders')} in the £500k-£5m sweet spot"
                " - highest ROI for bid effort"
            ),
            type="positive",
        ))

    high_priority = sum(1 for t in tenders if t.priority == "HIGH")
    if high_priority:
        insights.append(InsightCard(
            text=(
                f"{high_priority} high-priority {_plural(high_priority, 'opportunity', 'opportunities')}"
                " recommended for immediate bid action"
            ),
            type="action",
        ))

    return insights[:MAX_INSIGHTS]


def compute_source_breakdown(tenders: Sequence[ScoredTender]) -> List[SourceBreakdownData]:
    counts: Counter = Counter(SOURCE_LABELS.get(t.source, t.source) for t in tenders)
    rows = [SourceBreakdownData(source=s, count=c) for s, c in counts.items()]
    return sorted(rows, key=lambda row: row.count, reverse=True)


def compute_analytics(
    tenders: Sequence[ScoredTender],
    now: Optional[datetime] = None,
    profile: ScoringProfile = DEFAULT_PROFILE,
) -> AnalyticsData:
    """Aggregate a scored batch into the dashboard's analytics payload."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    eligible = [t for t in tenders if not t.excluded]
    regions = compute_regions(eligible)
    buyer_types = compute_buyer_types(eligible)

    return AnalyticsData(
        regions=regions,
        procurement_routes=compute_procurement_routes(eligible),
        value_bands=compute_value_bands(eligible),
        timeline=compute_timeline(eligible, now),
        buyer_types=buyer_types,
        insights=generate_insights(eligible, regions, buyer_types, now, profile.home_region),
        source_breakdown=compute_source_breakdown(tenders),
    )
