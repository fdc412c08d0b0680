"""Main orchestration: tokenization, scoring, best-match selection, verdict."""

from __future__ import annotations

import structlog

from crisisverify.config import VerifyConfig
from crisisverify.normalize import query_tokens
from crisisverify.scoring import score_report
from crisisverify.store import ReferenceStore
from crisisverify.types import Query, ReferenceReport, ScoredReport, Verdict

log = structlog.get_logger()

REASON_INDETERMINATE = "Insufficient data to verify; flagged for manual review."
REASON_SCAM = "Matches known misinformation pattern (Ref: {id})."
REASON_FALSE = "Official sources confirm this event is NOT occurring (Ref: {id})."
REASON_CONFIRMED = "Corroborated by official data (Ref: {id})."


class Matcher:
    """Matches incident reports against a reference store and issues verdicts.

    Holds no mutable state, so one instance can serve any number of
    concurrent verifications.
    """

    def __init__(self, store: ReferenceStore, config: VerifyConfig | None = None) -> None:
        self.store = store
        self.config = config or VerifyConfig()

    def score_all(self, query: Query) -> list[ScoredReport]:
        """Score every reference report, in store order."""
        tokens = query_tokens(query)
        scored: list[ScoredReport] = []
        for i, report in enumerate(self.store.reports()):
            sr = score_report(tokens, report, self.config)
            sr.report_index = i
            scored.append(sr)
        return scored

    def rank(self, query: Query) -> list[ScoredReport]:
        """All scored reports, best first. Equal scores keep store order."""
        return sorted(self.score_all(query), key=lambda x: x.score, reverse=True)

    def best_match(self, query: Query) -> tuple[ReferenceReport | None, float]:
        """Return the strictly highest-scoring report and its score.

        The first report wins a tie. A report scoring 0 is never selected.
        """
        reports = self.store.reports()
        best: ReferenceReport | None = None
        highest = 0.0
        for sr in self.score_all(query):
            if sr.score > highest:
                highest = sr.score
                best = reports[sr.report_index]
        return best, highest

    def verify(self, text: str, location: str) -> Verdict:
        """Verify one incident report. Never raises for string inputs."""
        query = Query(text=text, location=location)
        best, highest = self.best_match(query)
        verdict = self._decide(best, highest)

        log.debug(
            "verify_done",
            location=location,
            status=verdict.status,
            match_id=verdict.match_id,
            score=round(highest, 4),
        )
        return verdict

    def _decide(self, best: ReferenceReport | None, score: float) -> Verdict:
        """Map the best match and its score to a verdict."""
        if best is None or score <= self.config.scoring.match_threshold:
            return Verdict(
                status="pending",
                confidence=self.config.verdict.indeterminate_confidence,
                reason=REASON_INDETERMINATE,
                score=score,
            )

        if best.ground_truth_status == "scam":
            status, template = "scam", REASON_SCAM
        elif best.ground_truth_status == "false":
            # Reported under the scam label as well
            status, template = "scam", REASON_FALSE
        else:
            status, template = "verified", REASON_CONFIRMED

        return Verdict(
            status=status,
            confidence=best.confidence,
            reason=template.format(id=best.id),
            match_id=best.id,
            score=score,
        )


def verify(
    text: str,
    location: str,
    store: ReferenceStore,
    config: VerifyConfig | None = None,
) -> Verdict:
    """Verify an incident description and location against ``store``."""
    return Matcher(store, config).verify(text, location)
