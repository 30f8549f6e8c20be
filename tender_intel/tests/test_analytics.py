"""Tests for batch analytics over scored tenders."""

from datetime import timedelta

from conftest import NOW, make_scored
from tender_intel.analytics.aggregator import (
    compute_analytics,
    compute_buyer_types,
    compute_procurement_routes,
    compute_regions,
    compute_source_breakdown,
    compute_timeline,
    compute_value_bands,
    generate_insights,
    round_half_up,
)


def _due_in(days: float) -> str:
    return (NOW + timedelta(days=days)).isoformat()


def test_round_half_up_matches_dashboard_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_regions_sorted_by_count():
    tenders = [
        make_scored(id="1", region="London", value=100_000),
        make_scored(id="2", region="North West", value=200_000),
        make_scored(id="3", region="North West", value=None),
    ]

    regions = compute_regions(tenders)

    assert [(r.region, r.count, r.total_value) for r in regions] == [
        ("North West", 2, 200_000.0),
        ("London", 1, 100_000.0),
    ]


def test_procurement_routes_average_score():
    tenders = [
        make_scored(id="1", total=60, procurement_route="DPS"),
        make_scored(id="2", total=65, procurement_route="DPS"),
        make_scored(id="3", total=40, procurement_route="Open Tender"),
    ]

    routes = compute_procurement_routes(tenders)

    assert routes[0].route == "DPS"
    assert routes[0].count == 2
    # 62.5 rounds half up
    assert routes[0].avg_score == 63


def test_value_bands():
    values = [None, 50_000, 600_000, 3_000_000, 8_000_000, 2_000_000]
    tenders = [make_scored(id=str(i), value=v) for i, v in enumerate(values)]

    bands = {b.band: (b.count, b.is_sweet) for b in compute_value_bands(tenders)}

    assert bands == {
        "Under £100k": (1, False),
        "£100k-500k": (0, False),
        "£500k-2m": (1, True),
        "£2m-5m": (2, True),
        "£5m+": (1, False),
        "Undisclosed": (1, False),
    }


def test_timeline_weeks_then_months():
    tenders = [
        make_scored(id="1", deadline_date=_due_in(3)),
        make_scored(id="2", deadline_date=_due_in(9)),
        make_scored(id="3", deadline_date="2027-02-10"),
        make_scored(id="4", deadline_date="2027-12-01"),
        make_scored(id="5", deadline_date=None),
        make_scored(id="6", deadline_date="not a date"),
    ]

    timeline = [(e.week, e.count) for e in compute_timeline(tenders, NOW)]

    assert timeline[:4] == [("This week", 1), ("Next week", 1), ("Week 3", 0), ("Week 4", 0)]
    # First six months are always listed, later months only when something is due
    assert timeline[4:] == [
        ("Nov 2026", 0),
        ("Dec 2026", 0),
        ("Jan 2027", 0),
        ("Feb 2027", 1),
        ("Mar 2027", 0),
        ("Apr 2027", 0),
        ("Dec 2027", 1),
    ]


def test_buyer_types_sorted_by_value():
    tenders = [
        make_scored(id="1", buyer_type="Local Authority", value=100_000),
        make_scored(id="2", buyer_type="NHS Trust", value=900_000),
        make_scored(id="3", buyer_type="Local Authority", value=200_000),
    ]

    rows = compute_buyer_types(tenders)

    assert [(r.type, r.count) for r in rows] == [("NHS Trust", 1), ("Local Authority", 2)]


class TestInsights:
    def test_empty_batch_has_no_insights(self):
        assert generate_insights([], [], [], NOW) == []

    def test_home_region_card_is_positive(self):
        tenders = [make_scored(id=str(i), region="North West") for i in range(3)]
        tenders.append(make_scored(id="x", region="London"))

        insights = generate_insights(tenders, compute_regions(tenders), [], NOW)

        assert insights[0].text == "75% of current opportunities are in North West - your strongest region"
        assert insights[0].type == "positive"

    def test_other_region_card_is_neutral(self):
        tenders = [make_scored(id="1", region="London")]
        insights = generate_insights(tenders, compute_regions(tenders), [], NOW)
        assert insights[0].text == "100% of current opportunities are in London"
        assert insights[0].type == "neutral"

    def test_high_priority_plural(self):
        one = [make_scored(id="1", priority="HIGH")]
        two = [make_scored(id="1", priority="HIGH"), make_scored(id="2", priority="HIGH")]

        single = generate_insights(one, compute_regions(one), [], NOW)[-1].text
        plural = generate_insights(two, compute_regions(two), [], NOW)[-1].text

        assert single == "1 high-priority opportunity recommended for immediate bid action"
        assert plural == "2 high-priority opportunities recommended for immediate bid action"

    def test_at_most_four_cards_in_fixed_order(self):
        tenders = [
            make_scored(
                id="1",
                priority="HIGH",
                procurement_route="Framework Call-off",
                deadline_date=_due_in(5),
                value=1_000_000,
                buyer_type="NHS Trust",
            ),
        ]

        insights = generate_insights(tenders, compute_regions(tenders), compute_buyer_types(tenders), NOW)

        assert len(insights) == 4
        assert [i.type for i in insights] == ["positive", "action", "neutral", "positive"]
        assert insights[1].text == "1 framework call-off closing in the next 14 days - low effort, high win probability"
        assert insights[2].text == "NHS Trusts represent £1.0m in pipeline value"
        assert insights[3].text == "1 tender in the £500k-£5m sweet spot - highest ROI for bid effort"


def test_source_breakdown_includes_excluded():
    tenders = [
        make_scored(id="1", source="pcs"),
        make_scored(id="2", source="pcs", excluded=True, exclusion_reason="Catering", priority="SKIP"),
        make_scored(id="3", source="find-a-tender"),
    ]

    rows = compute_source_breakdown(tenders)

    assert [(r.source, r.count) for r in rows] == [("PCS (Scotland)", 2), ("Find a Tender", 1)]


def test_compute_analytics_uses_eligible_tenders_only():
    tenders = [
        make_scored(id="1", source="pcs", region="Scotland"),
        make_scored(id="2", source="pcs", region="Wales", excluded=True, exclusion_reason="Catering", priority="SKIP"),
    ]

    analytics = compute_analytics(tenders, now=NOW)

    assert [r.region for r in analytics.regions] == ["Scotland"]
    assert analytics.source_breakdown[0].count == 2
    dumped = analytics.model_dump(by_alias=True)
    assert set(dumped) == {
        "regions",
        "procurementRoutes",
        "valueBands",
        "timeline",
        "buyerTypes",
        "insights",
        "sourceBreakdown",
    }
