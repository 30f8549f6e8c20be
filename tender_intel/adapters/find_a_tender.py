"""Find a Tender Service (FTS) adapter - UK above-threshold notices."""

from typing import Any, Dict

from .ocds import CPV_ELECTRICITY, OcdsSearchAdapter


class FindATenderAdapter(OcdsSearchAdapter):
    """Adapter for the Find a Tender notices API.

    Endpoint: GET https://www.find-tender.service.gov.uk/api/1.0/notices
    Queried by CPV 09310000 first, then by the fallback keyword list.
    """

    SEARCH_URL = "https://www.find-tender.service.gov.uk/api/1.0/notices"
    NOTICE_URL = "https://www.find-tender.service.gov.uk/Notice/{notice_id}"
    ID_PREFIX = "fat-"
    ID_PATHS = ("id", "noticeId", "ocid")

    @property
    def source_name(self) -> str:
        return "find-a-tender"

    def cpv_params(self, since: str) -> Dict[str, Any]:
        return {"cpvCodes": CPV_ELECTRICITY, "publishedFrom": since, "size": 100}

    def keyword_params(self, keyword: str, since: str) -> Dict[str, Any]:
        return {"keyword": keyword, "publishedFrom": since, "size": 50}
