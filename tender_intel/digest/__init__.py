"""Daily email digest of recommended tenders."""

from .cron import run_digest_job, start_digest_cron, verify_cron_token
from .formatters import build_digest_html, build_subject, select_recommended
from .sender import DigestSender

__all__ = [
    "run_digest_job",
    "start_digest_cron",
    "verify_cron_token",
    "build_digest_html",
    "build_subject",
    "select_recommended",
    "DigestSender",
]
