"""Tests for the incident feed view models."""

import asyncio

import pytest

from crisisverify.feed import (
    Feed,
    FeedPost,
    badge,
    meter_color,
    trust_percent,
)
from crisisverify.store import ReferenceStore
from crisisverify.types import ReferenceReport, Verdict
from crisisverify.verification import VerificationService


def make_feed(delay: float = 0) -> Feed:
    store = ReferenceStore([
        ReferenceReport(
            id="R1",
            event="Flooding",
            location="Sector 4",
            details="Water levels dangerous",
            ground_truth_status="confirmed",
            confidence=0.98,
        ),
    ])
    return Feed(VerificationService(store, delay=delay))


def make_post(**overrides) -> FeedPost:
    fields = {
        "id": 1,
        "title": "Flood at Sector 4",
        "description": "Water rising",
        "location": "Sector 4",
        "source": "User Report",
    }
    fields.update(overrides)
    return FeedPost(**fields)


class TestFeed:
    def test_seed_post(self):
        feed = make_feed()
        post = feed.seed()
        assert post.title == "Flooding in Sector 4"
        assert post.status == "verified"
        assert post.confidence == 0.98
        assert post.source == "Official Sensor Network"
        assert feed.posts == [post]

    def test_submit_prepends_pending_post(self):
        feed = make_feed()
        feed.seed()

        async def run():
            post, task = feed.submit("Flood", "Sector 4", "severe flooding danger")
            snapshot = (post.status, post.confidence, post.final, feed.posts[0] is post)
            await task
            return post, snapshot

        post, snapshot = asyncio.run(run())

        assert snapshot == ("pending", 0.0, False, True)
        assert post.title == "Flood at Sector 4"
        assert post.source == "User Report"
        assert post.status == "verified"
        assert post.confidence == 0.98
        assert "Ref: R1" in post.reason
        assert post.final is True

    def test_unmatched_report_ends_unverified(self):
        feed = make_feed()

        async def run():
            post, task = feed.submit("Fire", "Mall", "smoke everywhere")
            await task
            return post

        post = asyncio.run(run())

        assert post.status == "pending"
        assert post.confidence == 0.45
        assert badge(post) == ("badge-pending", "Unverified")

    def test_discarded_post_drops_verdict(self):
        feed = make_feed(delay=0.01)

        async def run():
            post, task = feed.submit("Flood", "Sector 4", "severe flooding danger")
            assert feed.discard(post.id) is True
            verdict = await task
            return post, verdict

        post, verdict = asyncio.run(run())

        assert verdict.status == "verified"
        assert post.final is False
        assert feed.posts == []

    @pytest.mark.parametrize(
        "args",
        [("", "Sector 4", "flooding"), ("Flood", "", "flooding"), ("Flood", "Sector 4", "")],
    )
    def test_submit_requires_all_fields(self, args):
        with pytest.raises(ValueError):
            make_feed().submit(*args)

    def test_verdict_applied_once(self):
        feed = make_feed()
        post = feed.seed()
        verdict = Verdict(status="scam", confidence=0.9, reason="x")
        with pytest.raises(ValueError):
            feed.apply_verdict(post.id, verdict)

    def test_apply_to_unknown_post(self):
        verdict = Verdict(status="scam", confidence=0.9, reason="x")
        assert make_feed().apply_verdict(99, verdict) is False

    def test_discard_unknown_post(self):
        assert make_feed().discard(99) is False


class TestPresentation:
    def test_badges(self):
        assert badge(make_post(status="verified")) == ("badge-verified", "Verified")
        assert badge(make_post(status="scam")) == ("badge-scam", "Potential Scam")
        assert badge(make_post()) == ("badge-pending", "Analyzing...")
        assert badge(make_post(final=True)) == ("badge-pending", "Unverified")

    def test_meter_colors(self):
        assert meter_color("verified") == "success"
        assert meter_color("scam") == "danger"
        assert meter_color("pending") == "warning"

    @pytest.mark.parametrize(
        "confidence, expected",
        [(0.0, 0), (0.45, 45), (0.98, 98), (1.0, 100), (0.125, 13)],
    )
    def test_trust_percent(self, confidence, expected):
        assert trust_percent(confidence) == expected
