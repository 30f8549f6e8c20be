"""Template-driven bid recommendations.

The justification text is built from fixed templates over the score
breakdown, so the same breakdown always yields the same sentence.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

from ..models import RawTender, Recommendation, ScoreBreakdown
from .patterns import LARGE_FRAMEWORK_RE

LARGE_FRAMEWORK_VALUE = 10_000_000


def to_fixed(value: float, places: int = 0) -> str:
    """Fixed-point text rounded half up: to_fixed(2.5) == "3", to_fixed(1.25, 1) == "1.3"."""
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def format_value(value: Optional[float]) -> str:
    """£1.3m / £450k / £900, or "undisclosed value" for None and 0."""
    if not value:
        return "undisclosed value"
    if value >= 1_000_000:
        return f"£{to_fixed(value / 1_000_000, 1)}m"
    if value >= 1_000:
        return f"£{to_fixed(value / 1_000)}k"
    return f"£{value:g}"


def generate_recommendation(
    tender: RawTender,
    score: ScoreBreakdown,
    excluded: bool,
    exclusion_reason: Optional[str],
    procurement_route: str,
    buyer_type: str,
    region: str,
    business_name: str = "UrbanChain",
) -> Tuple[Recommendation, str]:
    """Pick a recommendation label and write its one-line justification."""
    if excluded:
        topic = (exclusion_reason or "non-supply services").lower()
        return "Skip", f"Skip: Contract is for {topic}, not electricity supply"

    total = score.total
    buyer = tender.buyer or "Unknown buyer"
    value_text = format_value(tender.value)

    if total >= 70:
        strengths = []
        if score.fit >= 20:
            strengths.append("strong match for HH electricity supply")
        elif score.fit >= 12:
            strengths.append("good electricity supply fit")
        if score.value >= 16 and tender.value:
            strengths.append(f"{value_text} value sits in our sweet spot")
        if score.win_probability >= 15:
            strengths.append(f"{procurement_route.lower()} route means lower competition")
        if score.geography >= 8:
            strengths.append(f"{region} geographic fit")
        if score.strategic >= 4:
            strengths.append(f"{buyer_type} is a strong reference customer")

        detail = ", ".join(strengths[:3]) if strengths else "high overall match across dimensions"
        return "Bid - Strong Fit", f"Strong fit: {detail} for {buyer}"

    if total >= 50:
        highlights = []
        if buyer_type != "Other Public Sector":
            highlights.append(f"{buyer_type} in {region}")
        if tender.value:
            highlights.append(f"{value_text} contract")
        if score.fit >= 12:
            highlights.append("relevant supply keywords")

        detail = (
            ", ".join(highlights[:2]) if highlights
            else f"moderate fit across dimensions for {buyer}"
        )
        return (
            "Bid - Worth Pursuing",
            f"Worth pursuing: {detail} - review requirements and assess capacity to bid",
        )

    if total >= 30 and is_large_framework(tender):
        return (
            "Monitor - Watch for Calloffs",
            f"Monitor: Large framework worth {value_text} - too large to win outright "
            f"but watch for regional call-off lots from {buyer}",
        )

    if total >= 30:
        return (
            "Review - Needs Assessment",
            f"Review: {buyer} {value_text} opportunity scores moderately - "
            "needs manual review of full tender documents to assess fit",
        )

    weakness = "weak keyword relevance" if score.fit < 8 else "poor fit"
    return "Skip", f"Skip: Low overall match ({total}/100) - {weakness} for {business_name}'s supply model"


def is_large_framework(tender: RawTender) -> bool:
    if tender.value is not None and tender.value > LARGE_FRAMEWORK_VALUE:
        return True
    return bool(LARGE_FRAMEWORK_RE.search(f"{tender.title} {tender.description}"))
