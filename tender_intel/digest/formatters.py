"""HTML email rendering for the daily tender digest."""

from __future__ import annotations

from datetime import date, datetime
from html import escape

from ..models import ScoredTender, ScrapeResult
from ..scorer.engine import parse_deadline
from ..scorer.recommend import to_fixed

RECOMMENDED_LABELS = ("Bid - Strong Fit", "Bid - Worth Pursuing")

EFFORT_COLORS = {
    "Low": "#00DCBC",
    "Medium": "#F59E0B",
    "High": "#EF4444",
}


def _plural(count: int, word: str) -> str:
    return word if count == 1 else f"{word}s"


def format_money(value: float | None) -> str:
    if not value:
        return "Not disclosed"
    if value >= 1_000_000:
        return f"£{to_fixed(value / 1_000_000, 1)}m"
    if value >= 1_000:
        return f"£{to_fixed(value / 1_000)}k"
    return f"£{to_fixed(value)}"


def format_date(iso: str | None) -> str:
    """Render an ISO date like 14 Nov 2026. Unparseable text is shown as-is."""
    if not iso:
        return "Not specified"
    parsed = parse_deadline(iso)
    if parsed is None:
        return iso
    return f"{parsed.day} {parsed.strftime('%b %Y')}"


def select_recommended(result: ScrapeResult, top_n: int | None = 5) -> list[ScoredTender]:
    """Eligible tenders labelled worth bidding, in ranked order."""
    recommended = [
        t for t in result.tenders
        if not t.excluded and t.recommendation in RECOMMENDED_LABELS
    ]
    return recommended if top_n is None else recommended[:top_n]


def build_subject(result: ScrapeResult) -> str:
    recommended = len(select_recommended(result, top_n=None))
    stats = result.stats
    if recommended:
        return f"[UC Tenders] {recommended} recommended to bid - {stats.high_priority} high priority"
    eligible = stats.after_exclusions
    return f"[UC Tenders] Daily digest - {eligible} eligible {_plural(eligible, 'tender')}"


def _render_tender(t: ScoredTender, index: int) -> str:
    color = EFFORT_COLORS.get(t.effort_estimate, "#94A3B8")
    s = t.score
    return f"""
    <tr style="border-bottom: 1px solid #1E293B;">
      <td style="padding: 16px; vertical-align: top;">
        <div style="margin-bottom: 8px;">
          <span style="background: #00DCBC; color: #000; padding: 2px 10px; border-radius: 4px; font-size: 11px; font-weight: 700;">#{index + 1} &middot; {s.total}/100</span>
          <span style="background: {color}22; color: {color}; padding: 2px 8px; border-radius: 4px; font-size: 11px; font-weight: 600;">{escape(t.effort_estimate)} Effort</span>
        </div>
        <a href="{escape(t.url, quote=True)}" style="color: #00DCBC; text-decoration: none; font-weight: 600; font-size: 15px;">{escape(t.title)}</a>
        <div style="background: #1E293B; border-left: 3px solid #00DCBC; padding: 10px 14px; margin: 10px 0;">
          <p style="margin: 0; color: #E2E8F0; font-size: 13px;">{escape(t.recommendation_why)}</p>
        </div>
        <div style="color: #94A3B8; font-size: 12px;">
          <strong>Buyer:</strong> {escape(t.buyer or "Not specified")} &bull;
          <strong>Value:</strong> {format_money(t.value)} &bull;
          <strong>Deadline:</strong> {escape(format_date(t.deadline_date))} &bull;
          <strong>Region:</strong> {escape(t.region)}
        </div>
        <div style="color: #64748B; font-size: 11px; margin-top: 4px;">
          Fit {s.fit}/30 &bull; Value {s.value}/20 &bull; Timeline {s.timeline}/15 &bull; Win {s.win_probability}/20 &bull; Geo {s.geography}/10 &bull; Strategic {s.strategic}/5
        </div>
      </td>
    </tr>"""


def build_digest_html(
    result: ScrapeResult,
    top_n: int = 5,
    today: date | datetime | None = None,
    business_name: str = "UrbanChain",
) -> str:
    """Render the digest email body for one collection result."""
    stats = result.stats
    recommended = select_recommended(result, top_n)
    today = today or datetime.now()
    date_str = f"{today.strftime('%A')} {today.day} {today.strftime('%B %Y')}"

    if recommended:
        rows = "".join(_render_tender(t, i) for i, t in enumerate(recommended))
        body = f"""
      <h2 style="color: #00DCBC; font-size: 18px; margin: 24px 0 12px 0;">Top Recommendations</h2>
      <table width="100%" cellpadding="0" cellspacing="0">{rows}
      </table>"""
        remaining = stats.after_exclusions - len(recommended)
        if remaining > 0:
            body += f"""
      <div style="text-align: center; padding: 16px; color: #94A3B8; font-size: 13px;">+ {remaining} more {_plural(remaining, 'tender')} in the dashboard</div>"""
    else:
        body = f"""
      <div style="text-align: center; padding: 40px; color: #94A3B8;">
        <p style="font-size: 16px;">No recommended tenders found in the last {stats.days_searched} day(s).</p>
        <p style="font-size: 13px;">{stats.after_exclusions} eligible {_plural(stats.after_exclusions, 'tender')} scored below the recommendation threshold.</p>
      </div>"""

    name = escape(business_name)
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="margin: 0; padding: 0; background: #070B14; font-family: -apple-system, 'Segoe UI', Roboto, sans-serif;">
  <div style="max-width: 680px; margin: 0 auto; background: #0F172A;">
    <div style="background: #00378E; padding: 28px 32px;">
      <h1 style="margin: 0; color: #FFFFFF; font-size: 22px;">{name} Tender Intelligence</h1>
      <p style="margin: 6px 0 0 0; color: #00DCBC; font-size: 14px;">{date_str}</p>
    </div>
    <div style="background: #1E293B; padding: 16px 32px; font-size: 13px;">
      <table width="100%" cellpadding="0" cellspacing="0"><tr>
        <td style="color: #94A3B8;">Found: <strong style="color: #FFF;">{stats.total_found}</strong></td>
        <td style="color: #94A3B8;">Eligible: <strong style="color: #FFF;">{stats.after_exclusions}</strong></td>
        <td style="color: #94A3B8;">Pipeline: <strong style="color: #00DCBC;">{format_money(stats.pipeline_value)}</strong></td>
        <td style="color: #94A3B8;">High: <strong style="color: #00DCBC;">{stats.high_priority}</strong></td>
      </tr></table>
    </div>
    <div style="padding: 8px 32px 32px 32px;">{body}
    </div>
    <div style="background: #00378E; padding: 16px 32px; text-align: center;">
      <p style="margin: 0; color: #94A3B8; font-size: 12px;">{name} Tender Intelligence &middot; CPV 09310000 (Electricity Supply)</p>
    </div>
  </div>
</body>
</html>"""
