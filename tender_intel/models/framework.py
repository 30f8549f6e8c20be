"""Framework intelligence models: tracked frameworks, signals and contract expiries."""

from typing import List, Literal, Optional

from pydantic import Field

from .raw_tender import ContractModel


SignalType = Literal["pipeline", "market-engagement", "award", "re-procurement"]

FrameworkStatus = Literal["active", "expiring-soon", "re-procuring", "expired"]

FrameworkTier = Literal["critical", "high", "medium"]


class FrameworkSignal(ContractModel):
    """A Find a Tender notice that mentions a tracked framework."""

    title: str
    url: str
    date: str = ""
    type: SignalType = "pipeline"


class FrameworkDefinition(ContractModel):
    """Static description of a known electricity-supply framework."""

    id: str
    name: str
    operator: str
    reference: str
    description: str
    estimated_value: str
    expiry_date: Optional[str] = None
    next_procurement_window: Optional[str] = None
    relevance: str
    action_required: str
    tier: FrameworkTier
    search_terms: List[str] = Field(default_factory=list, exclude=True)


class TrackedFramework(FrameworkDefinition):
    """Framework definition enriched with live signals and a derived status."""

    fts_signals: List[FrameworkSignal] = Field(default_factory=list)
    current_status: FrameworkStatus = "active"


class ContractExpiry(ContractModel):
    """Awarded supply contract with a known or estimated end date."""

    id: str
    title: str
    buyer: str = ""
    value: Optional[float] = None
    award_date: str = ""
    expiry_date: Optional[str] = None
    estimated_expiry_date: Optional[str] = None
    region: str = ""
    source: str = "find-a-tender"
    url: str = ""
    days_until_expiry: Optional[int] = None


class FrameworkIntelligence(ContractModel):
    frameworks: List[TrackedFramework]
    contract_expiries: List[ContractExpiry]
    upcoming_reprocurements: int
    expiring_next_6_months: int
    total_framework_value: str
