"""Incident feed view models.

A submitted report is shown as a pending post straight away. When its
verification finishes, exactly one terminal verdict is applied to it. The
scoring engine never touches the feed; it only returns verdicts.
"""

from __future__ import annotations

import asyncio
import itertools
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

import structlog

from crisisverify.types import Verdict, VerdictStatus
from crisisverify.verification import VerificationService

log = structlog.get_logger()

DEFAULT_REASON = "Analyzing reliability..."
USER_SOURCE = "User Report"

_BADGES: dict[str, tuple[str, str]] = {
    "verified": ("badge-verified", "Verified"),
    "scam": ("badge-scam", "Potential Scam"),
}
_METER_COLORS: dict[str, str] = {
    "verified": "success",
    "scam": "danger",
    "pending": "warning",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class FeedPost:
    """A report card in the feed."""

    id: int
    title: str
    description: str
    location: str
    source: str
    status: VerdictStatus = "pending"
    confidence: float = 0.0
    reason: str | None = None
    final: bool = False
    timestamp: str = field(default_factory=_now)


def badge(post: FeedPost) -> tuple[str, str]:
    """(css class, label) for a post's status badge."""
    if post.status in _BADGES:
        return _BADGES[post.status]
    if post.final:
        return "badge-pending", "Unverified"
    return "badge-pending", "Analyzing..."


def meter_color(status: VerdictStatus) -> str:
    return _METER_COLORS.get(status, "warning")


def trust_percent(confidence: float) -> int:
    """Confidence as a whole percentage, rounding halves up."""
    return math.floor(confidence * 100 + 0.5)


class Feed:
    """Newest-first list of posts, fed by a VerificationService."""

    def __init__(self, service: VerificationService) -> None:
        self.service = service
        self._posts: list[FeedPost] = []
        self._ids = itertools.count(1)

    @property
    def posts(self) -> list[FeedPost]:
        return list(self._posts)

    def get(self, post_id: int) -> FeedPost | None:
        for post in self._posts:
            if post.id == post_id:
                return post
        return None

    def seed(self) -> FeedPost:
        """Add the sample sensor-network post shown before any submissions."""
        post = FeedPost(
            id=next(self._ids),
            title="Flooding in Sector 4",
            description="Water levels represent a significant danger. Avoid area.",
            location="Sector 4",
            source="Official Sensor Network",
            status="verified",
            confidence=0.98,
            final=True,
        )
        self._posts.append(post)
        return post

    def submit(
        self, incident_type: str, location: str, description: str
    ) -> tuple[FeedPost, asyncio.Task[Verdict]]:
        """Prepend a pending post and start verifying it.

        Must be called with an event loop running. The returned task resolves
        to the verdict once it has been applied (or dropped, if the post was
        discarded in the meantime).
        """
        if not incident_type or not location or not description:
            raise ValueError("incident type, location and description are all required")

        post = FeedPost(
            id=next(self._ids),
            title=f"{incident_type} at {location}",
            description=description,
            location=location,
            source=USER_SOURCE,
        )
        self._posts.insert(0, post)
        log.info("report_submitted", post_id=post.id, title=post.title)

        task = asyncio.get_running_loop().create_task(self._verify_and_apply(post))
        return post, task

    async def _verify_and_apply(self, post: FeedPost) -> Verdict:
        verdict = await self.service.verify(post.description, post.location)
        self.apply_verdict(post.id, verdict)
        return verdict

    def apply_verdict(self, post_id: int, verdict: Verdict) -> bool:
        """Apply the one terminal verdict to a pending post.

        Returns False when the post is no longer in the feed.
        """
        post = self.get(post_id)
        if post is None:
            log.debug("verdict_dropped", post_id=post_id, status=verdict.status)
            return False
        if post.final:
            raise ValueError(f"post {post_id} already has a final verdict")

        post.status = verdict.status
        post.confidence = verdict.confidence
        post.reason = verdict.reason
        post.final = True
        log.info(
            "verdict_applied",
            post_id=post_id,
            status=verdict.status,
            confidence=verdict.confidence,
        )
        return True

    def discard(self, post_id: int) -> bool:
        post = self.get(post_id)
        if post is None:
            return False
        self._posts.remove(post)
        return True
