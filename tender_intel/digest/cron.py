"""Daily digest job: collect the last day's tenders, score them, email the top picks."""

from __future__ import annotations

import asyncio
import hmac
import logging

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from ..config import Config, load_config, validate_digest_config
from ..models import ScrapeResult
from ..pipeline import run_collection
from .sender import DigestSender

logger = logging.getLogger(__name__)


def verify_cron_token(authorization: str | None, secret: str | None) -> bool:
    """Bearer-token check for the scheduled trigger.

    With no secret configured every caller is accepted.
    """
    if not secret:
        return True
    expected = f"Bearer {secret}"
    return hmac.compare_digest((authorization or "").encode(), expected.encode())


def run_digest_job(config: Config | None = None, sender: DigestSender | None = None) -> ScrapeResult:
    """Execute one digest run and return the collection it was built from."""
    config = config or load_config()
    validate_digest_config(config)
    sender = sender or DigestSender.from_config(config)

    result = asyncio.run(run_collection(days=config.digest_days, config=config))
    sent = sender.send(result)

    logger.info(
        "digest_job_complete eligible=%d high=%d sent=%s",
        result.stats.after_exclusions,
        result.stats.high_priority,
        sent,
    )
    return result


def start_digest_cron(config: Config | None = None) -> None:
    """Start the blocking scheduler; the digest runs daily at digest_hour_utc."""
    config = config or load_config()
    validate_digest_config(config)

    scheduler = BlockingScheduler(timezone="UTC")
    scheduler.add_job(
        run_digest_job,
        trigger=CronTrigger(hour=config.digest_hour_utc, minute=0, timezone="UTC"),
        kwargs={"config": config},
        id="daily_tender_digest",
        name="Daily Tender Digest",
        replace_existing=True,
        max_instances=1,
    )
    logger.info("Digest cron scheduled for %02d:00 UTC", config.digest_hour_utc)
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Shutting down scheduler...")
        scheduler.shutdown()
