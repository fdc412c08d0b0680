"""Tests for asynchronous verification."""

import asyncio

from crisisverify.config import VerifyConfig
from crisisverify.store import ReferenceStore
from crisisverify.types import ReferenceReport
from crisisverify.verification import VerificationService, verify_after_delay


def make_store() -> ReferenceStore:
    return ReferenceStore([
        ReferenceReport(
            id="R1",
            event="Flooding",
            location="Sector 4",
            details="Water levels dangerous",
            ground_truth_status="confirmed",
            confidence=0.98,
        ),
        ReferenceReport(
            id="R2",
            event="Relief Fund",
            location="Citywide",
            details="Donation requests by text are fraudulent",
            ground_truth_status="scam",
            confidence=0.92,
        ),
    ])


def test_verify_after_delay_returns_verdict():
    verdict = asyncio.run(
        verify_after_delay("severe flooding danger", "Sector 4", make_store(), delay=0)
    )
    assert verdict.status == "verified"
    assert verdict.match_id == "R1"


def test_default_delay_comes_from_config():
    config = VerifyConfig()
    config.simulation.delay_seconds = 0
    verdict = asyncio.run(
        verify_after_delay("relief fund donation", "Citywide", make_store(), config=config)
    )
    assert verdict.status == "scam"


def test_service_uses_configured_delay():
    config = VerifyConfig()
    config.simulation.delay_seconds = 0.25
    assert VerificationService(make_store(), config).delay == 0.25
    assert VerificationService(make_store(), config, delay=0).delay == 0


def test_concurrent_requests_do_not_interfere():
    service = VerificationService(make_store(), delay=0.01)
    queries = [
        ("severe flooding danger", "Sector 4"),
        ("relief fund donation", "Citywide"),
        ("is it ok", ""),
    ] * 5

    async def run():
        tasks = [service.submit(text, loc) for text, loc in queries]
        return await asyncio.gather(*tasks)

    verdicts = asyncio.run(run())

    assert [v.status for v in verdicts] == ["verified", "scam", "pending"] * 5


def test_completion_order_is_independent_of_submission_order():
    store = make_store()
    finished: list[str] = []

    async def run_one(name: str, gate: asyncio.Event | None, release: asyncio.Event | None):
        if gate is not None:
            await gate.wait()
        verdict = await verify_after_delay("flooding", "Sector 4", store, delay=0)
        finished.append(name)
        if release is not None:
            release.set()
        return verdict

    async def run():
        second_done = asyncio.Event()
        # The first submission cannot finish until the second has delivered
        return await asyncio.gather(
            run_one("first", second_done, None),
            run_one("second", None, second_done),
        )

    verdicts = asyncio.run(run())

    assert finished == ["second", "first"]
    assert [v.status for v in verdicts] == ["verified", "verified"]


def test_abandoned_request_completes_harmlessly():
    service = VerificationService(make_store(), delay=0)

    async def run():
        service.submit("severe flooding danger", "Sector 4")
        # Nobody awaits the first task; a later request is unaffected
        return await service.verify("relief fund donation", "Citywide")

    verdict = asyncio.run(run())
    assert verdict.status == "scam"
