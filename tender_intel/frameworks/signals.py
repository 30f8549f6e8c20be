"""Signal classification and framework status rules."""

import math
import re
from datetime import datetime
from typing import Optional, Sequence

from ..models.framework import FrameworkDefinition, FrameworkSignal, FrameworkStatus, SignalType
from ..scorer.engine import parse_deadline

EXPIRING_SOON_DAYS = 365

_MARKET_ENGAGEMENT_RE = re.compile(r"market\s+engagement|\bPIN\b|prior\s+information", re.IGNORECASE)
_AWARD_RE = re.compile(r"award", re.IGNORECASE)
_REPROCUREMENT_RE = re.compile(r"expir|renew|re-?procur", re.IGNORECASE)
_YEAR_RE = re.compile(r"^\s*(\d{4})")


def classify_signal(title: str, tag: str = "") -> SignalType:
    """Classify a notice mentioning a framework.

    Market engagement beats award, which beats re-procurement wording.
    """
    if _MARKET_ENGAGEMENT_RE.search(title):
        return "market-engagement"
    if _AWARD_RE.search(tag or "") or _AWARD_RE.search(title):
        return "award"
    if _REPROCUREMENT_RE.search(title):
        return "re-procurement"
    return "pipeline"


def days_between(date_text: Optional[str], now: datetime) -> Optional[int]:
    parsed = parse_deadline(date_text)
    if parsed is None:
        return None
    return math.ceil((parsed - now).total_seconds() / 86400)


def detect_status(
    framework: FrameworkDefinition,
    signals: Sequence[FrameworkSignal],
    now: datetime,
) -> FrameworkStatus:
    if any(s.type in ("re-procurement", "market-engagement") for s in signals):
        return "re-procuring"

    days_left = days_between(framework.expiry_date, now)
    if days_left is not None:
        if days_left < 0:
            return "expired"
        if days_left <= EXPIRING_SOON_DAYS:
            return "expiring-soon"

    match = _YEAR_RE.match(framework.next_procurement_window or "")
    if match:
        window_year = int(match.group(1))
        if window_year <= now.year:
            return "re-procuring"
        if window_year == now.year + 1:
            return "expiring-soon"

    return "active"
