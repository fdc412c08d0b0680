"""CSV/JSONL input of report submissions and output of verdicts."""

from __future__ import annotations

import csv
import json
from pathlib import Path

from crisisverify.feed import FeedPost

SUBMISSION_FIELDS = ("type", "location", "description")


def read_submissions(path: str | Path) -> list[tuple[str, str, str]]:
    """Read report submissions from CSV or JSONL.

    Rows missing any of type, location or description are skipped.
    Returns list of (incident_type, location, description) tuples.
    """
    path = Path(path)

    if path.suffix == ".jsonl":
        rows = _read_jsonl(path)
    else:
        rows = _read_csv(path)

    results: list[tuple[str, str, str]] = []
    for row in rows:
        values = tuple(str(row.get(k) or "").strip() for k in SUBMISSION_FIELDS)
        if all(values):
            results.append(values)
    return results


def _read_csv(path: Path) -> list[dict]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def _read_jsonl(path: Path) -> list[dict]:
    rows: list[dict] = []
    with path.open(encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            rows.append(json.loads(line))
    return rows


def write_verdicts(posts: list[FeedPost], path: str | Path) -> None:
    """Write each post's verdict to CSV or JSONL."""
    path = Path(path)

    if path.suffix == ".jsonl":
        _write_jsonl(posts, path)
    else:
        _write_csv(posts, path)


def _write_csv(posts: list[FeedPost], path: Path) -> None:
    fieldnames = ["id", "title", "location", "source", "status", "confidence", "reason"]

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for p in posts:
            writer.writerow({
                "id": p.id,
                "title": p.title,
                "location": p.location,
                "source": p.source,
                "status": p.status,
                "confidence": f"{p.confidence:.2f}",
                "reason": p.reason or "",
            })


def _write_jsonl(posts: list[FeedPost], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        for p in posts:
            record = {
                "id": p.id,
                "title": p.title,
                "location": p.location,
                "source": p.source,
                "status": p.status,
                "confidence": p.confidence,
                "reason": p.reason,
            }
            f.write(json.dumps(record) + "\n")
