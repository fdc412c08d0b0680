"""Asynchronous delay-then-verify units of work."""

from __future__ import annotations

import asyncio

import structlog

from crisisverify.config import VerifyConfig
from crisisverify.matcher import Matcher
from crisisverify.store import ReferenceStore
from crisisverify.types import Verdict

log = structlog.get_logger()


async def verify_after_delay(
    text: str,
    location: str,
    store: ReferenceStore,
    delay: float | None = None,
    config: VerifyConfig | None = None,
) -> Verdict:
    """Wait out the simulated processing delay, then verify synchronously.

    The delay is the only suspension point.
    """
    config = config or VerifyConfig()
    if delay is None:
        delay = config.simulation.delay_seconds
    await asyncio.sleep(delay)
    return Matcher(store, config).verify(text, location)


class VerificationService:
    """Schedules independent verifications against a shared, read-only store."""

    def __init__(
        self,
        store: ReferenceStore,
        config: VerifyConfig | None = None,
        delay: float | None = None,
    ) -> None:
        self.store = store
        self.config = config or VerifyConfig()
        self.delay = self.config.simulation.delay_seconds if delay is None else delay

    async def verify(self, text: str, location: str) -> Verdict:
        return await verify_after_delay(
            text, location, self.store, delay=self.delay, config=self.config
        )

    def submit(self, text: str, location: str) -> asyncio.Task[Verdict]:
        """Start a verification on the running loop and return its task.

        Tasks complete independently and in no particular order.
        """
        log.debug("verification_submitted", location=location, delay=self.delay)
        return asyncio.get_running_loop().create_task(self.verify(text, location))
