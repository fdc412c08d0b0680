"""Keyword-overlap scoring of a query against reference reports."""

from __future__ import annotations

from crisisverify.config import VerifyConfig
from crisisverify.normalize import report_content, significant_tokens
from crisisverify.types import ReferenceReport, ScoredReport


def score_report(
    tokens: list[str],
    report: ReferenceReport,
    config: VerifyConfig,
) -> ScoredReport:
    """Score a query token sequence against one reference report.

    Counts significant query tokens found as substrings of the report content
    and divides by the full token count, short tokens included. Duplicate
    tokens each count. The score is a relevance approximation, not a probability.
    """
    content = report_content(report)
    significant = significant_tokens(tokens, config.scoring.min_token_length)
    matched = [t for t in significant if t in content]

    return ScoredReport(
        report_index=0,  # Will be set by caller
        score=len(matched) / max(len(tokens), 1),
        match_count=len(matched),
        token_count=len(tokens),
        matched_tokens=matched,
    )
