"""ScoredTender - RawTender extended with score breakdown, classification and verdict."""

from typing import Literal, Optional

from pydantic import Field

from .raw_tender import ContractModel, RawTender


Recommendation = Literal[
    "Bid - Strong Fit",
    "Bid - Worth Pursuing",
    "Monitor - Watch for Calloffs",
    "Review - Needs Assessment",
    "Skip",
]

EffortEstimate = Literal["Low", "Medium", "High"]

Priority = Literal["HIGH", "MEDIUM", "LOW", "SKIP"]


class ScoreBreakdown(ContractModel):
    """Six additive, capped scoring dimensions. Max total is 100."""

    fit: int = Field(default=0, ge=0, le=30, description="Supply keyword and CPV fit")
    value: int = Field(default=0, ge=0, le=20, description="Contract value band")
    timeline: int = Field(default=0, ge=0, le=15, description="Days until deadline")
    win_probability: int = Field(default=0, ge=0, le=20, description="Procurement route competitiveness")
    geography: int = Field(default=0, ge=0, le=10, description="Regional preference")
    strategic: int = Field(default=0, ge=0, le=5, description="Buyer relationship value")
    total: int = Field(default=0, ge=0, le=100, description="Sum of all dimensions")


class ScoredTender(RawTender):
    """A RawTender after relevance gating, classification and scoring."""

    score: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    excluded: bool = Field(default=False, description="Failed relevance gate or matched a hard exclusion")
    exclusion_reason: Optional[str] = Field(None, description="Set iff excluded")
    recommendation: Recommendation = Field(default="Skip")
    recommendation_why: str = Field(default="", description="Template-driven justification")
    effort_estimate: EffortEstimate = Field(default="Medium")
    priority: Priority = Field(default="SKIP")
    procurement_route: str = Field(default="Not Specified")
    buyer_type: str = Field(default="Other Public Sector")
    region: str = Field(default="Not Specified")
