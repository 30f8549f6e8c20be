"""title|buyer deduplication for tenders and awards."""

from .dedup import Deduplicator, dedup_awards, dedup_key, dedup_tenders

__all__ = ["Deduplicator", "dedup_awards", "dedup_key", "dedup_tenders"]
