"""Deduplication of notices collected from overlapping portals."""

import logging
from typing import Iterable, List, Optional, Protocol, Set, TypeVar

logger = logging.getLogger(__name__)


class _Keyed(Protocol):
    title: str
    buyer: str


T = TypeVar("T", bound=_Keyed)


def dedup_key(title: str, buyer: str) -> str:
    """Cross-portal identity: normalized title plus buyer.

    The same notice is often republished by aggregators with a different id,
    so ids are not compared across sources.
    """
    return f"{(title or '').strip().lower()}|{(buyer or '').strip().lower()}"


class Deduplicator:
    """Keeps the first record seen for each title|buyer key.

    The set of seen keys persists across calls, so records can be fed in
    batches (one adapter result at a time) in merge order.
    """

    def __init__(self, seen_keys: Optional[Set[str]] = None):
        self.seen_keys = seen_keys or set()

    def deduplicate(self, records: Iterable[T]) -> List[T]:
        """Filter out records whose key has already been seen.

        Args:
            records: Records in merge order; the first occurrence wins.

        Returns:
            The records not seen before, order preserved.
        """
        unique_records = []
        duplicate_count = 0

        for record in records:
            key = dedup_key(record.title, record.buyer)
            if key in self.seen_keys:
                duplicate_count += 1
                logger.debug("Duplicate found: %s", key)
            else:
                unique_records.append(record)
                self.seen_keys.add(key)

        logger.info("Deduplication: %d unique, %d duplicates", len(unique_records), duplicate_count)
        return unique_records


def dedup_tenders(tenders: Iterable[T]) -> List[T]:
    return Deduplicator().deduplicate(tenders)


def dedup_awards(awards: Iterable[T]) -> List[T]:
    """Deduplicate awards and order them newest first.

    Award dates are ISO strings, so lexical order is date order; undated
    awards sort last.
    """
    unique_awards = Deduplicator().deduplicate(awards)
    return sorted(unique_awards, key=lambda a: a.award_date or "", reverse=True)
