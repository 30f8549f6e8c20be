"""Unit tests for cross-portal deduplication with fixture data."""

from conftest import make_tender
from tender_intel.deduplicator import Deduplicator, dedup_awards, dedup_key, dedup_tenders
from tender_intel.models import AwardNotice


def test_key_ignores_case_and_surrounding_whitespace():
    assert dedup_key("  Supply of Electricity ", "Bolton Council") == dedup_key("supply of electricity", "BOLTON COUNCIL ")
    assert dedup_key("Supply of Electricity", "Bolton Council") != dedup_key("Supply of Electricity", "Wigan Council")


def test_first_occurrence_wins():
    fat = make_tender(id="fat-1", source="find-a-tender")
    bidstats = make_tender(id="bs-1", source="bidstats", title=fat.title.upper())
    other = make_tender(id="fat-2", title="Energy supply for schools")

    unique = dedup_tenders([fat, bidstats, other])

    assert [t.id for t in unique] == ["fat-1", "fat-2"]


def test_output_keys_are_unique_and_dedup_is_idempotent():
    tenders = [
        make_tender(id="a", title="Electricity supply", buyer="Council A"),
        make_tender(id="b", title="Electricity supply", buyer="Council B"),
        make_tender(id="c", title="electricity supply", buyer="council a"),
        make_tender(id="d", title="Gas and electricity", buyer="Council A"),
    ]

    once = dedup_tenders(tenders)
    keys = [dedup_key(t.title, t.buyer) for t in once]

    assert len(keys) == len(set(keys))
    assert dedup_tenders(once) == once
    assert [t.id for t in once] == ["a", "b", "d"]


def test_seen_keys_persist_across_batches():
    deduplicator = Deduplicator()
    first_run = deduplicator.deduplicate([make_tender(id="a")])
    second_run = deduplicator.deduplicate([make_tender(id="b")])

    assert len(first_run) == 1
    assert second_run == []


def test_empty_title_and_buyer_still_dedup():
    tenders = [make_tender(id="a", title="", buyer=""), make_tender(id="b", title="", buyer="")]
    assert [t.id for t in dedup_tenders(tenders)] == ["a"]


def test_awards_sorted_newest_first_with_undated_last():
    awards = [
        AwardNotice(title="A", buyer="x", award_date="2026-03-01"),
        AwardNotice(title="B", buyer="x", award_date=""),
        AwardNotice(title="C", buyer="x", award_date="2026-07-15"),
        AwardNotice(title="a", buyer="X", award_date="2026-09-01"),
    ]

    result = dedup_awards(awards)

    assert [a.title for a in result] == ["C", "A", "B"]
