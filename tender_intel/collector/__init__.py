"""Collection orchestrator - concurrent fan-out over all source adapters."""

from .orchestrator import CollectionResult, collect_tenders

__all__ = ["CollectionResult", "collect_tenders"]
