"""Contracts Finder adapter - UK below-threshold notices via the OCDS search API."""

from typing import Any, Dict

from .ocds import CPV_ELECTRICITY, OcdsSearchAdapter


class ContractsFinderAdapter(OcdsSearchAdapter):
    """Adapter for Contracts Finder OCDS Search.

    Endpoint: GET https://www.contractsfinder.service.gov.uk/Published/Notices/OCDS/Search
    Results are OCDS releases; ocid is the stable notice identifier.
    """

    SEARCH_URL = "https://www.contractsfinder.service.gov.uk/Published/Notices/OCDS/Search"
    NOTICE_URL = "https://www.contractsfinder.service.gov.uk/Notice/{notice_id}"
    ID_PREFIX = "cf-"
    ID_PATHS = ("ocid", "id")

    @property
    def source_name(self) -> str:
        return "contracts-finder"

    def cpv_params(self, since: str) -> Dict[str, Any]:
        return {"cpvCodes": CPV_ELECTRICITY, "publishedFrom": since, "size": 100}

    def keyword_params(self, keyword: str, since: str) -> Dict[str, Any]:
        return {"q": keyword, "publishedFrom": since, "size": 50}
