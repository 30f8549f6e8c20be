"""Tests for the daily digest: rendering, the Resend sender and the cron job."""

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
import respx

from conftest import NOW, make_scored
from tender_intel.config import Config
from tender_intel.digest import (
    DigestSender,
    build_digest_html,
    build_subject,
    run_digest_job,
    select_recommended,
    verify_cron_token,
)
from tender_intel.digest.formatters import format_date, format_money
from tender_intel.digest.sender import RESEND_URL
from tender_intel.models import ScrapeResult, ScrapeStats


def _result(tenders=None, **stats) -> ScrapeResult:
    fields = {
        "total_found": 12,
        "after_dedup": 10,
        "after_exclusions": 8,
        "high_priority": 1,
        "pipeline_value": 1_250_000.0,
        "scraped_at": NOW.isoformat(),
        "days_searched": 1,
    }
    fields.update(stats)
    return ScrapeResult(tenders=tenders or [], stats=ScrapeStats(**fields))


def _recommended_result() -> ScrapeResult:
    return _result([
        make_scored(
            id="fat-1",
            total=85,
            title="Supply of Electricity <Lot 1>",
            recommendation="Bid - Strong Fit",
            recommendation_why="Strong fit: strong match for HH electricity supply for Bolton Council",
            buyer="Bolton Council",
            value=1_250_000,
            deadline_date="2026-11-14T12:00:00Z",
            effort_estimate="Low",
            priority="HIGH",
        ),
        make_scored(id="cf-1", total=55, recommendation="Bid - Worth Pursuing"),
        make_scored(id="bs-1", total=35, recommendation="Review - Needs Assessment", priority="LOW"),
    ])


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatting:
    def test_select_recommended_keeps_bid_labels_only(self):
        picks = select_recommended(_recommended_result())
        assert [t.id for t in picks] == ["fat-1", "cf-1"]
        assert len(select_recommended(_recommended_result(), top_n=1)) == 1

    def test_subject_with_recommendations(self):
        assert build_subject(_recommended_result()) == "[UC Tenders] 2 recommended to bid - 1 high priority"

    def test_subject_without_recommendations(self):
        assert build_subject(_result(after_exclusions=1)) == "[UC Tenders] Daily digest - 1 eligible tender"

    def test_html_escapes_and_lists_picks(self):
        body = build_digest_html(_recommended_result(), today=date(2026, 10, 19))

        assert "Monday 19 October 2026" in body
        assert "Supply of Electricity &lt;Lot 1&gt;" in body
        assert "<Lot 1>" not in body
        assert "#1 &middot; 85/100" in body
        assert "14 Nov 2026" in body
        assert "+ 6 more tenders in the dashboard" in body

    def test_html_without_picks(self):
        body = build_digest_html(_result(after_exclusions=3), today=date(2026, 10, 19))
        assert "No recommended tenders found in the last 1 day(s)." in body
        assert "3 eligible tenders scored below the recommendation threshold." in body

    def test_format_helpers(self):
        assert format_money(None) == "Not disclosed"
        assert format_money(1_250_000) == "£1.3m"
        assert format_money(2_500) == "£3k"
        assert format_money(449.5) == "£450"
        assert format_money(450) == "£450"
        assert format_date(None) == "Not specified"
        assert format_date("2026-11-14") == "14 Nov 2026"
        assert format_date("end of November") == "end of November"


# ---------------------------------------------------------------------------
# Sender
# ---------------------------------------------------------------------------

class TestDigestSender:
    def _sender(self, to="bids@example.com") -> DigestSender:
        return DigestSender(api_key="re_test", to=to, from_email="tenders@example.com")

    @respx.mock
    def test_send_posts_to_resend(self):
        route = respx.post(RESEND_URL).mock(return_value=httpx.Response(200, json={"id": "email_123"}))

        assert self._sender().send(_recommended_result()) is True

        request = route.calls[0].request
        assert request.headers["Authorization"] == "Bearer re_test"
        payload = json.loads(request.content)
        assert payload["to"] == ["bids@example.com"]
        assert payload["from"] == "tenders@example.com"
        assert payload["subject"] == "[UC Tenders] 2 recommended to bid - 1 high priority"
        assert "Top Recommendations" in payload["html"]

    @respx.mock
    def test_server_error_retries_then_fails(self):
        route = respx.post(RESEND_URL).mock(return_value=httpx.Response(503, text="unavailable"))

        assert self._sender().send(_result()) is False
        assert route.call_count == 3

    @respx.mock
    def test_client_error_is_not_retried(self):
        route = respx.post(RESEND_URL).mock(return_value=httpx.Response(422, json={"message": "invalid from"}))

        assert self._sender().send(_result()) is False
        assert route.call_count == 1

    @respx.mock
    def test_missing_recipient_skips_send(self):
        route = respx.post(RESEND_URL).mock(return_value=httpx.Response(200, json={"id": "x"}))

        assert self._sender(to=None).send(_result()) is False
        assert route.call_count == 0

    def test_from_config(self):
        config = Config(resend_api_key="re_cfg", alert_email="a@example.com", digest_top_n=3)
        sender = DigestSender.from_config(config)
        assert sender.api_key == "re_cfg"
        assert sender.to == "a@example.com"
        assert sender.top_n == 3


# ---------------------------------------------------------------------------
# Cron trigger and job
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "authorization, secret, expected",
    [
        (None, None, True),
        ("anything", "", True),
        ("Bearer s3cret", "s3cret", True),
        ("Bearer wrong", "s3cret", False),
        ("s3cret", "s3cret", False),
        (None, "s3cret", False),
    ],
)
def test_verify_cron_token(authorization, secret, expected):
    assert verify_cron_token(authorization, secret) is expected


def test_run_digest_job_collects_and_sends():
    config = Config(resend_api_key="re_test", alert_email="bids@example.com", digest_days=1)
    result = _recommended_result()
    sender = MagicMock()
    sender.send.return_value = True

    with patch("tender_intel.digest.cron.run_collection", new=AsyncMock(return_value=result)) as mocked:
        returned = run_digest_job(config, sender=sender)

    assert returned is result
    mocked.assert_awaited_once_with(days=1, config=config)
    sender.send.assert_called_once_with(result)


def test_run_digest_job_requires_digest_config():
    with pytest.raises(ValueError, match="RESEND_API_KEY"):
        run_digest_job(Config(resend_api_key=None, alert_email="bids@example.com"))
