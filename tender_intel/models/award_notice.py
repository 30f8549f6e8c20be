"""AwardNotice and SourceHealth records reported alongside tenders."""

from typing import Optional

from pydantic import Field

from .raw_tender import ContractModel


class AwardNotice(ContractModel):
    """Historical contract award, used for market intelligence only."""

    title: str = Field(..., description="Awarded contract title")
    buyer: str = Field(default="", description="Awarding organisation")
    winner: str = Field(default="", description="Winning supplier")
    value: Optional[float] = Field(None, description="Awarded value in GBP")
    award_date: str = Field(default="", description="Award date as published")
    region: str = Field(default="", description="Delivery region as published")
    url: str = Field(default="", description="Link to the award notice")


class SourceHealth(ContractModel):
    """Per-adapter outcome for one collection run."""

    name: str
    ok: bool
    count: int = 0
