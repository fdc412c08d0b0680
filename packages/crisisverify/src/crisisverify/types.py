"""Core types for the crisisverify report verification system."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

GroundTruthStatus = Literal["confirmed", "false", "scam"]
VerdictStatus = Literal["verified", "scam", "pending"]

ReportId = str | int


@dataclass(frozen=True)
class ReferenceReport:
    id: ReportId
    event: str
    location: str
    details: str
    ground_truth_status: GroundTruthStatus
    confidence: float


@dataclass(frozen=True)
class Query:
    text: str
    location: str


@dataclass
class ScoredReport:
    report_index: int
    score: float
    match_count: int = 0
    token_count: int = 0
    matched_tokens: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Verdict:
    status: VerdictStatus
    confidence: float
    reason: str
    match_id: ReportId | None = None
    score: float = 0.0

    def to_dict(self) -> dict[str, str | float]:
        """Caller-facing shape: status, confidence and reason only."""
        return {
            "status": self.status,
            "confidence": self.confidence,
            "reason": self.reason,
        }
