"""Scoring profile: the business-specific tables behind the scoring dimensions.

A profile is immutable once loaded and is passed explicitly to the scorer,
so alternative profiles (a different home region, say) can be scored side
by side.
"""

import json
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, field_validator


class ScoringProfile(BaseModel):
    """Per-business lookup tables for geography, strategic and route scoring."""

    model_config = ConfigDict(frozen=True)

    business_name: str = "UrbanChain"
    home_region: str = "North West"

    # Region -> geography score (0-10)
    geography: Dict[str, int] = {
        "North West": 10,
        "North East / Yorkshire": 7,
        "Midlands": 5,
        "National": 4,
        "London": 3,
        "South East": 3,
        "South West": 3,
        "East of England": 3,
        "Scotland": 2,
        "Wales": 2,
        "Northern Ireland": 2,
    }
    geography_default: int = 4

    # Buyer type -> strategic score (0-5)
    strategic: Dict[str, int] = {
        "NHS Trust": 5,
        "University": 5,
        "Local Authority": 4,
        "Housing Association": 4,
        "Emergency Services": 4,
        "MOD": 4,
        "Education": 3,
    }
    strategic_default: int = 1

    # Procurement route -> base win probability (0-20)
    route_base: Dict[str, int] = {
        "Direct Award": 18,
        "Framework Call-off": 16,
        "Further Competition": 16,
        "Mini Competition": 13,
        "DPS": 12,
        "Framework": 11,
        "Open Tender": 8,
        "Restricted": 6,
        "Competitive Dialogue": 5,
    }
    route_default: int = 10

    version: str = "1.0"

    @field_validator("geography")
    @classmethod
    def geography_range(cls, v: Dict[str, int]) -> Dict[str, int]:
        return _check_range(v, 10)

    @field_validator("strategic")
    @classmethod
    def strategic_range(cls, v: Dict[str, int]) -> Dict[str, int]:
        return _check_range(v, 5)

    @field_validator("route_base")
    @classmethod
    def route_range(cls, v: Dict[str, int]) -> Dict[str, int]:
        return _check_range(v, 20)

    def geography_score(self, region: str) -> int:
        return self.geography.get(region, self.geography_default)

    def strategic_score(self, buyer_type: str) -> int:
        return self.strategic.get(buyer_type, self.strategic_default)

    def route_score(self, route: str) -> int:
        return self.route_base.get(route, self.route_default)


def _check_range(table: Dict[str, int], maximum: int) -> Dict[str, int]:
    for key, score in table.items():
        if not 0 <= score <= maximum:
            raise ValueError(f"Score for {key!r} must be between 0 and {maximum}, got {score}")
    return table


DEFAULT_PROFILE = ScoringProfile()


def load_profile(filepath: Optional[str] = None) -> ScoringProfile:
    """Load a scoring profile from file or return the default.

    Supports JSON and YAML formats. Tables given in the file replace the
    default tables wholesale.

    Args:
        filepath: Optional path to a profile file

    Returns:
        ScoringProfile instance

    Raises:
        FileNotFoundError: If filepath provided but doesn't exist
        ValueError: If the format is unsupported or a score is out of range
    """
    if not filepath:
        return DEFAULT_PROFILE

    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Scoring profile not found: {filepath}")

    if path.suffix == ".json":
        with open(path, "r") as f:
            data = json.load(f)
    elif path.suffix in [".yaml", ".yml"]:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}. Use .json, .yaml, or .yml")

    return ScoringProfile(**(data or {}))
