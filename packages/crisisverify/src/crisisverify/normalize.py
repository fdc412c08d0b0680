"""Query and reference report normalization."""

from __future__ import annotations

from crisisverify.types import Query, ReferenceReport


def query_string(query: Query) -> str:
    """Join the query text and location with one space and lower-case the result."""
    return f"{query.text} {query.location}".lower()


def tokenize(s: str) -> list[str]:
    """Split on runs of whitespace. Empty tokens never appear."""
    return s.split()


def query_tokens(query: Query) -> list[str]:
    return tokenize(query_string(query))


def significant_tokens(tokens: list[str], min_length: int = 3) -> list[str]:
    """Keep tokens strictly longer than ``min_length``, preserving order and duplicates."""
    return [t for t in tokens if len(t) > min_length]


def report_content(report: ReferenceReport) -> str:
    """Searchable content of a reference report.

    Matching against it is substring containment, so the content is not tokenized.
    """
    return f"{report.event} {report.location} {report.details}".lower()
