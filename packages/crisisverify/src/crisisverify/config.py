"""Configuration for the crisisverify verification system."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ScoringConfig:
    min_token_length: int = 3  # tokens must be strictly longer than this
    match_threshold: float = 0.3  # best score must be strictly above this


@dataclass
class VerdictConfig:
    indeterminate_confidence: float = 0.45


@dataclass
class SimulationConfig:
    delay_seconds: float = 1.5


@dataclass
class VerifyConfig:
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    verdict: VerdictConfig = field(default_factory=VerdictConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
