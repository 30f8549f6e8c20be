"""RawTender - Shared model for normalized procurement notices from all sources."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


SourceTag = Literal[
    "find-a-tender",
    "contracts-finder",
    "bidstats",
    "pcs",
    "sell2wales",
    "d3-tenders",
    "the-chest",
]


class ContractModel(BaseModel):
    """Base for every record in the collection output contract.

    Attributes are snake_case in Python and camelCase on the wire.
    Records are immutable once built.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class RawTender(ContractModel):
    """Normalized procurement notice from any source adapter.

    Shared contract between the adapters, the orchestrator and the scorer.
    """

    # Identity
    id: str = Field(..., description="Source-prefixed identifier, unique within one run")
    source: SourceTag = Field(..., description="Originating adapter tag")
    url: str = Field(..., description="Canonical link back to the notice")

    # Notice details
    title: str = Field(..., description="Notice title")
    description: str = Field(default="", description="Free-text description, may be empty")
    buyer: str = Field(default="", description="Buyer organisation name, may be empty")
    location: str = Field(default="", description="Free-text location, may be empty")

    # Dates (ISO strings as published upstream)
    published_date: str = Field(default="", description="Publication date")
    deadline_date: Optional[str] = Field(None, description="Submission deadline; None when not published")

    # Financial
    value: Optional[float] = Field(None, description="Contract value in GBP; None means undisclosed")
    currency: str = Field(default="GBP", description="Currency code")

    # Classification
    cpv_codes: List[str] = Field(default_factory=list, description="CPV classification codes")
    is_pipeline: bool = Field(default=False, description="Early-stage planning signal rather than an active tender")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "fat-012345-2026",
                "source": "find-a-tender",
                "url": "https://www.find-tender.service.gov.uk/Notice/012345-2026",
                "title": "Supply of Electricity to Council Buildings",
                "description": "Half-hourly electricity supply via framework call-off",
                "buyer": "Manchester City Council",
                "location": "Manchester",
                "publishedDate": "2026-10-01",
                "deadlineDate": "2026-11-14T12:00:00Z",
                "value": 1250000.0,
                "currency": "GBP",
                "cpvCodes": ["09310000"],
                "isPipeline": False,
            }
        }
    )
