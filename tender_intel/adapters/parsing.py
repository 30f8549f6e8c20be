"""Defensive field lookup and text parsing shared by all adapters.

Upstream portals rename and reshape fields freely, so every lookup here
tolerates missing keys, wrong types and odd formatting and falls back to
empty defaults instead of raising.
"""

import re
from datetime import datetime
from typing import Any, Iterable, List, Optional


_EMPTY = (None, "", [], {})

_MONEY_RE = re.compile(
    r"£\s?(\d[\d,]*(?:\.\d+)?)\s*(bn|billion|m|million|k|thousand)?\b",
    re.IGNORECASE,
)

_MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "million": 1_000_000,
    "bn": 1_000_000_000,
    "billion": 1_000_000_000,
}

_MONTHS = (
    "january|february|march|april|may|june|july|august|september|october|november|december"
    "|jan|feb|mar|apr|jun|jul|aug|sep|sept|oct|nov|dec"
)

_DATE_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2}(?:T[\d:.]+(?:Z|[+-]\d{2}:?\d{2})?)?"
    r"|\d{1,2}/\d{1,2}/\d{4}"
    rf"|\d{{1,2}}(?:st|nd|rd|th)?\s+(?:{_MONTHS})\.?\s+\d{{4}})",
    re.IGNORECASE,
)

_DATE_FMTS = [
    "%d/%m/%Y",
    "%d %B %Y",
    "%d %b %Y",
]

# Field labels portals print next to notice links; a labelled value ends where the next one starts
_FIELD_LABELS = (
    r"buyer|organi[sz]ation|contracting\s+authority|authority|published\s+by|"
    r"estimated\s+value|contract\s+value|value|closing\s+date|deadline|"
    r"date\s+published|published|location|region|reference|notice\s+type|status"
)

_OCDS_PREFIX_RE = re.compile(r"^ocds-[a-z0-9]+-", re.IGNORECASE)


def dig(data: Any, path: str) -> Any:
    """Walk a dotted path through nested dicts and lists ("a.items.0.b")."""
    current = data
    for part in path.split("."):
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def first(data: Any, *paths: str, default: Any = None) -> Any:
    """Value of the first path that resolves to something non-empty."""
    for path in paths:
        value = dig(data, path)
        if value not in _EMPTY:
            return value
    return default


def first_text(data: Any, *paths: str) -> str:
    """First path that renders to a non-empty string, else ""."""
    for path in paths:
        text = as_text(dig(data, path))
        if text:
            return text
    return ""


def as_text(value: Any) -> str:
    """Render a looked-up value as a clean string ("" for dicts, lists, None)."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    return clean_text(str(value))


def clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def parse_amount(value: Any) -> Optional[float]:
    """Parse a monetary amount. Zero, negative and unparseable values are None."""
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        text = str(value).strip()
        money = parse_money(text if "£" in text else f"£{text}")
        if money is None:
            return None
        amount = money
    return amount if amount > 0 else None


def parse_money(text: str) -> Optional[float]:
    """First £ amount in free text, with k/m/bn suffixes expanded.

    "£1.2m" -> 1200000.0, "£450k" -> 450000.0, "£1,250,000" -> 1250000.0
    """
    match = _MONEY_RE.search(text or "")
    if not match:
        return None
    try:
        amount = float(match.group(1).replace(",", ""))
    except ValueError:
        return None
    suffix = (match.group(2) or "").lower()
    amount *= _MULTIPLIERS.get(suffix, 1)
    return amount if amount > 0 else None


def parse_date_text(text: str) -> Optional[str]:
    """Normalize a UK-style or ISO date string. Returns ISO text or None."""
    text = clean_text(text)
    if not text:
        return None
    if re.match(r"^\d{4}-\d{2}-\d{2}", text):
        return text
    text = re.sub(r"(\d)(st|nd|rd|th)\b", r"\1", text, flags=re.IGNORECASE)
    text = text.replace(".", "")
    if re.search(r"\bsept\b", text, re.IGNORECASE):
        text = re.sub(r"\bsept\b", "Sep", text, flags=re.IGNORECASE)
    for fmt in _DATE_FMTS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue
    return None


def find_date(text: str, labels: Iterable[str]) -> Optional[str]:
    """Date following the first matching label ("Closing date: 14/11/2026")."""
    for label in labels:
        match = re.search(
            rf"{label}\s*[:\-]?\s*(?:\w+day,?\s+)?{_DATE_RE.pattern}",
            text or "",
            re.IGNORECASE,
        )
        if match:
            parsed = parse_date_text(match.group(1))
            if parsed:
                return parsed
    return None


def find_labelled(text: str, labels: Iterable[str], max_length: int = 120) -> str:
    """Text following a label up to the next known field label or line end."""
    for label in labels:
        match = re.search(
            rf"{label}\s*[:\-]\s*(.+?)(?=\s*(?:{_FIELD_LABELS})\s*:|\s*[|\n]|$)",
            text or "",
            re.IGNORECASE,
        )
        if match:
            value = clean_text(match.group(1))
            if value:
                return value[:max_length]
    return ""


def strip_ocds_prefix(ocid: str) -> str:
    return _OCDS_PREFIX_RE.sub("", ocid or "")


def unique(values: Iterable[str]) -> List[str]:
    """De-duplicate while keeping first-seen order."""
    seen = set()
    out = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out
