"""Deterministic six-dimension scoring engine for electricity-supply tenders.

Pure functions only: no network, no I/O, no ambient clock (callers pass
`now`, which defaults to the current UTC time). Every function is total:
missing values and dates map to defined defaults, never to errors.
"""

import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from ..models import EffortEstimate, Priority, RawTender, ScoreBreakdown, ScoredTender
from .classify import (
    NO_SUPPLY_KEYWORDS,
    check_exclusion,
    detect_buyer_type,
    detect_procurement_route,
    detect_region,
    passes_relevance_gate,
)
from .patterns import CPV_BONUSES, FIT_KEYWORDS, WIN_BONUSES, total_weight
from .profile import DEFAULT_PROFILE, ScoringProfile
from .recommend import generate_recommendation

MAX_FIT = 30
MAX_WIN_PROBABILITY = 20

UNDISCLOSED_VALUE_SCORE = 8
MISSING_DEADLINE_SCORE = 7

# (upper bound, inclusive?, score) in ascending order
_VALUE_BANDS = (
    (50_000, False, 2),
    (100_000, False, 5),
    (200_000, False, 8),
    (500_000, False, 14),
    (2_000_000, True, 20),
    (5_000_000, True, 14),
    (10_000_000, True, 8),
    (20_000_000, True, 5),
)

_EFFORT = {
    "Direct Award": "Low",
    "Framework Call-off": "Low",
    "Further Competition": "Medium",
    "Mini Competition": "Medium",
    "DPS": "Medium",
    "Framework": "Medium",
    "Open Tender": "High",
    "Restricted": "High",
    "Competitive Dialogue": "High",
}


def score_fit(text: str, cpv_codes: Sequence[str]) -> int:
    """Keyword weights plus the single best CPV prefix bonus, capped at 30."""
    score = total_weight(FIT_KEYWORDS, text)
    for prefix, bonus in CPV_BONUSES:
        if any(code.startswith(prefix) for code in cpv_codes):
            score += bonus
            break
    return min(score, MAX_FIT)


def score_value(value: Optional[float]) -> int:
    """Value band score. Undisclosed (None or 0) gets a moderate default."""
    if not value:
        return UNDISCLOSED_VALUE_SCORE
    for bound, inclusive, score in _VALUE_BANDS:
        if value < bound or (inclusive and value == bound):
            return score
    return 2


def parse_deadline(deadline: Optional[str]) -> Optional[datetime]:
    """Parse an ISO date or datetime; naive values are taken as UTC."""
    if not deadline:
        return None
    text = deadline.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_until(deadline: Optional[str], now: datetime) -> Optional[int]:
    """Whole days until the deadline. None if absent or unparseable.

    Future deadlines round up. A deadline that has already passed, even by
    minutes, is always negative.
    """
    parsed = parse_deadline(deadline)
    if parsed is None:
        return None
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    days = (parsed - now).total_seconds() / 86400
    if parsed < now:
        return math.floor(days)
    return math.ceil(days)


def score_timeline(deadline: Optional[str], now: Optional[datetime] = None) -> int:
    """Deadline proximity: peaks at 14-45 days out, zero once past."""
    days_left = days_until(deadline, now or datetime.now(timezone.utc))
    if days_left is None:
        return MISSING_DEADLINE_SCORE
    if days_left < 0:
        return 0
    if days_left < 3:
        return 2
    if days_left <= 7:
        return 8
    if days_left <= 14:
        return 12
    if days_left <= 45:
        return 15
    if days_left <= 90:
        return 10
    return 5


def score_win_probability(text: str, procurement_route: str, profile: ScoringProfile = DEFAULT_PROFILE) -> int:
    base = profile.route_score(procurement_route) + total_weight(WIN_BONUSES, text)
    return min(base, MAX_WIN_PROBABILITY)


def score_geography(region: str, profile: ScoringProfile = DEFAULT_PROFILE) -> int:
    return profile.geography_score(region)


def score_strategic(buyer_type: str, profile: ScoringProfile = DEFAULT_PROFILE) -> int:
    return profile.strategic_score(buyer_type)


def estimate_effort(procurement_route: str) -> EffortEstimate:
    return _EFFORT.get(procurement_route, "Medium")


def get_priority(total: int, excluded: bool) -> Priority:
    """Band a total score.

    Thresholds:
    - HIGH: 70-100
    - MEDIUM: 50-69
    - LOW: 30-49
    - SKIP: 0-29, or excluded
    """
    if excluded:
        return "SKIP"
    if total >= 70:
        return "HIGH"
    if total >= 50:
        return "MEDIUM"
    if total >= 30:
        return "LOW"
    return "SKIP"


def score_tender(
    tender: RawTender,
    profile: ScoringProfile = DEFAULT_PROFILE,
    now: Optional[datetime] = None,
) -> ScoredTender:
    """Gate, classify, score and recommend a single tender.

    Args:
        tender: Normalized notice from any adapter
        profile: Business-specific scoring tables
        now: Reference time for the timeline dimension (default: current UTC)

    Returns:
        ScoredTender; excluded tenders carry an exclusion_reason and an
        all-zero breakdown
    """
    text = f"{tender.title} {tender.description}"

    relevant = passes_relevance_gate(text)
    exclusion = check_exclusion(text)
    excluded = not relevant or exclusion is not None
    # The topic label is more specific than the gate reason
    exclusion_reason = exclusion or (NO_SUPPLY_KEYWORDS if not relevant else None)

    procurement_route = detect_procurement_route(text)
    buyer_type = detect_buyer_type(tender.buyer, tender.description)
    region = detect_region(tender.location, tender.buyer, tender.description)

    if excluded:
        breakdown = ScoreBreakdown()
    else:
        fit = score_fit(text, tender.cpv_codes)
        value = score_value(tender.value)
        timeline = score_timeline(tender.deadline_date, now)
        win_probability = score_win_probability(text, procurement_route, profile)
        geography = score_geography(region, profile)
        strategic = score_strategic(buyer_type, profile)
        breakdown = ScoreBreakdown(
            fit=fit,
            value=value,
            timeline=timeline,
            win_probability=win_probability,
            geography=geography,
            strategic=strategic,
            total=fit + value + timeline + win_probability + geography + strategic,
        )

    recommendation, why = generate_recommendation(
        tender,
        breakdown,
        excluded,
        exclusion_reason,
        procurement_route,
        buyer_type,
        region,
        business_name=profile.business_name,
    )

    return ScoredTender(
        **tender.model_dump(include=set(RawTender.model_fields)),
        score=breakdown,
        excluded=excluded,
        exclusion_reason=exclusion_reason,
        recommendation=recommendation,
        recommendation_why=why,
        effort_estimate=estimate_effort(procurement_route),
        priority=get_priority(breakdown.total, excluded),
        procurement_route=procurement_route,
        buyer_type=buyer_type,
        region=region,
    )


def score_tenders(
    tenders: Iterable[RawTender],
    profile: ScoringProfile = DEFAULT_PROFILE,
    now: Optional[datetime] = None,
) -> List[ScoredTender]:
    """Score every tender and rank by total, highest first.

    sorted() is stable, so equal totals keep their input order.
    """
    now = now or datetime.now(timezone.utc)
    scored = [score_tender(tender, profile, now) for tender in tenders]
    return sorted(scored, key=lambda t: t.score.total, reverse=True)
