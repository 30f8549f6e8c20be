"""Analytics aggregation over scored tenders."""

from .aggregator import SOURCE_LABELS, compute_analytics

__all__ = ["SOURCE_LABELS", "compute_analytics"]
