"""Rule-based relevance, classification and scoring for electricity-supply tenders."""

from .classify import (
    check_exclusion,
    detect_buyer_type,
    detect_procurement_route,
    detect_region,
    passes_relevance_gate,
)
from .engine import (
    estimate_effort,
    get_priority,
    score_fit,
    score_tender,
    score_tenders,
    score_timeline,
    score_value,
    score_win_probability,
)
from .profile import DEFAULT_PROFILE, ScoringProfile, load_profile
from .recommend import format_value, generate_recommendation

__all__ = [
    "check_exclusion",
    "detect_buyer_type",
    "detect_procurement_route",
    "detect_region",
    "passes_relevance_gate",
    "estimate_effort",
    "get_priority",
    "score_fit",
    "score_tender",
    "score_tenders",
    "score_timeline",
    "score_value",
    "score_win_probability",
    "DEFAULT_PROFILE",
    "ScoringProfile",
    "load_profile",
    "format_value",
    "generate_recommendation",
]
