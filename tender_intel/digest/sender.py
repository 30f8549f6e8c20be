"""Send the digest email through the Resend REST API with retry."""

from __future__ import annotations

import logging

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import Config
from ..models import ScrapeResult
from .formatters import build_digest_html, build_subject

logger = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"


class DigestRetryableError(Exception):
    """Raised on 429 / 5xx so tenacity retries."""
    pass


class DigestSender:
    """Renders a ScrapeResult and emails it to the configured recipient."""

    def __init__(
        self,
        api_key: str | None,
        to: str | None,
        from_email: str = "tenders@urbanchain.energy",
        top_n: int = 5,
        business_name: str = "UrbanChain",
    ) -> None:
        self.api_key = api_key or ""
        self.to = to
        self.from_email = from_email
        self.top_n = top_n
        self.business_name = business_name

    @classmethod
    def from_config(cls, config: Config) -> "DigestSender":
        return cls(
            api_key=config.resend_api_key,
            to=config.alert_email,
            from_email=config.from_email,
            top_n=config.digest_top_n,
        )

    @retry(
        retry=retry_if_exception_type((DigestRetryableError, httpx.TransportError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    def _post_email(self, payload: dict) -> dict:
        """POST to Resend. Raises DigestRetryableError on 429/5xx."""
        resp = httpx.post(
            RESEND_URL,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
            timeout=30,
        )

        if resp.status_code == 429 or resp.status_code >= 500:
            raise DigestRetryableError(f"Resend returned {resp.status_code}: {resp.text[:200]}")
        if resp.status_code >= 400:
            # Bad key, unverified sender domain, invalid payload
            raise RuntimeError(f"Resend API error {resp.status_code}: {resp.text[:200]}")

        return resp.json()

    def build_payload(self, result: ScrapeResult) -> dict:
        return {
            "from": self.from_email,
            "to": [self.to],
            "subject": build_subject(result),
            "html": build_digest_html(result, top_n=self.top_n, business_name=self.business_name),
        }

    def send(self, result: ScrapeResult) -> bool:
        """Email the digest. Returns True on success, False if skipped or failed."""
        if not self.to:
            logger.warning("digest_skipped reason='ALERT_EMAIL not set'")
            return False

        payload = self.build_payload(result)
        try:
            data = self._post_email(payload)
        except (DigestRetryableError, RuntimeError, httpx.HTTPError, ValueError) as exc:
            logger.error("digest_failed to=%s error='%s'", self.to, exc)
            return False

        logger.info("digest_sent to=%s id=%s subject='%s'", self.to, data.get("id"), payload["subject"])
        return True
