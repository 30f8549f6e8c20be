"""Source adapters for UK procurement portals."""

from typing import List, Tuple

from .awards import ContractsFinderAwardsAdapter
from .base import BaseAdapter, SourceRun, SourceSession, SourceUnavailableError
from .contracts_finder import ContractsFinderAdapter
from .find_a_tender import FindATenderAdapter
from .portals import (
    BidstatsAdapter,
    D3TendersAdapter,
    PcsAdapter,
    Sell2WalesAdapter,
    TheChestAdapter,
)

TENDER_ADAPTER_CLASSES = (
    FindATenderAdapter,
    ContractsFinderAdapter,
    BidstatsAdapter,
    PcsAdapter,
    Sell2WalesAdapter,
    D3TendersAdapter,
    TheChestAdapter,
)


def default_adapters(config=None) -> Tuple[List[BaseAdapter], List[BaseAdapter]]:
    """Tender adapters (in merge order) and award adapters, built from config."""
    kwargs = {}
    if config is not None:
        kwargs = {"timeout": config.request_timeout_seconds, "max_pages": config.max_pages}
    tenders = [cls(**kwargs) for cls in TENDER_ADAPTER_CLASSES]
    awards = [ContractsFinderAwardsAdapter(**kwargs)]
    return tenders, awards


__all__ = [
    "BaseAdapter",
    "SourceRun",
    "SourceSession",
    "SourceUnavailableError",
    "FindATenderAdapter",
    "ContractsFinderAdapter",
    "BidstatsAdapter",
    "PcsAdapter",
    "Sell2WalesAdapter",
    "D3TendersAdapter",
    "TheChestAdapter",
    "ContractsFinderAwardsAdapter",
    "TENDER_ADAPTER_CLASSES",
    "default_adapters",
]
