"""Relevance gate, hard exclusions and display classification."""

from typing import Optional

from .patterns import (
    BUYER_TYPES,
    EXCLUSION_PATTERNS,
    PROCUREMENT_ROUTES,
    REGIONS,
    SUPPLY_KEYWORDS,
    first_label,
)

NO_SUPPLY_KEYWORDS = "No supply keywords found"


def passes_relevance_gate(text: str) -> bool:
    return any(pattern.search(text) for pattern in SUPPLY_KEYWORDS)


def check_exclusion(text: str) -> Optional[str]:
    """Label of the first out-of-scope topic found, or None."""
    for pattern, label in EXCLUSION_PATTERNS:
        if pattern.search(text):
            return label
    return None


def detect_procurement_route(text: str) -> str:
    return first_label(PROCUREMENT_ROUTES, text, "Not Specified")


def detect_buyer_type(buyer: str, description: str) -> str:
    return first_label(BUYER_TYPES, f"{buyer} {description}", "Other Public Sector")


def detect_region(location: str, buyer: str, description: str) -> str:
    """UK region from place names in location, then buyer, then description.

    All three are searched as one string, so the first region in table order
    wins regardless of which field mentions it.
    """
    return first_label(REGIONS, f"{location} {buyer} {description}", "Not Specified")
