"""Immutable in-memory store of trusted reference reports."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any, Literal

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from crisisverify.types import ReferenceReport

log = structlog.get_logger()

REQUIRED_FIELDS = ("event", "location", "details", "groundTruthStatus", "confidence")
RECORDS_KEY = "trusted_reports"
_DOCUMENT_NAMES = {"ground_truth_status": "groundTruthStatus"}


class DataLoadError(Exception):
    """Reference data is unreachable or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ReferenceRecord(BaseModel):
    """One reference record as it appears in the source document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: StrictStr | StrictInt | None = None
    event: StrictStr
    location: StrictStr
    details: StrictStr
    ground_truth_status: Literal["confirmed", "false", "scam"] = Field(alias="groundTruthStatus")
    confidence: StrictFloat = Field(ge=0.0, le=1.0)


class ReferenceStore:
    """Read-only, ordered collection of reference reports."""

    def __init__(self, reports: Sequence[ReferenceReport] = ()) -> None:
        self._reports: tuple[ReferenceReport, ...] = tuple(reports)

    @classmethod
    def empty(cls) -> ReferenceStore:
        return cls(())

    def reports(self) -> tuple[ReferenceReport, ...]:
        """All reports in their original order."""
        return self._reports

    def __iter__(self) -> Iterator[ReferenceReport]:
        return iter(self._reports)

    def __len__(self) -> int:
        return len(self._reports)

    def __repr__(self) -> str:
        return f"ReferenceStore(reports={len(self._reports)})"


def default_data_path() -> Path:
    """Path to the sample corpus shipped with the package."""
    return Path(__file__).parent / "data" / "trusted_reports.json"


def load(source: str | Path | Mapping[str, Any] | Sequence[Any]) -> ReferenceStore:
    """Build a ReferenceStore from a JSON file path or an already-parsed document.

    The document is either ``{"trusted_reports": [...]}`` or a bare list of records.

    Raises:
        DataLoadError: if the source cannot be read, is not valid JSON, or a
            record is missing a required field or holds an invalid value.
    """
    if isinstance(source, (str, Path)):
        data = _read_json(Path(source))
    else:
        data = source

    records = _extract_records(data)
    reports = [_parse_record(i, rec) for i, rec in enumerate(records)]

    seen: set[str | int] = set()
    for report in reports:
        if report.id in seen:
            raise DataLoadError(f"duplicate report id {report.id!r}", field="id")
        seen.add(report.id)

    log.info("store_loaded", count=len(reports))
    return ReferenceStore(reports)


def load_or_empty(source: str | Path | Mapping[str, Any] | Sequence[Any]) -> ReferenceStore:
    """Load reference data, falling back to an empty store on DataLoadError.

    With an empty store every verdict is indeterminate, but verification keeps working.
    """
    try:
        return load(source)
    except DataLoadError as e:
        log.error("store_load_failed", error=str(e), field=e.field)
        return ReferenceStore.empty()


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise DataLoadError(f"cannot read reference data from {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DataLoadError(f"invalid JSON in {path}: {e}") from e


def _extract_records(data: Any) -> Sequence[Any]:
    if isinstance(data, Mapping):
        if RECORDS_KEY not in data:
            raise DataLoadError(f"missing '{RECORDS_KEY}' collection", field=RECORDS_KEY)
        data = data[RECORDS_KEY]
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise DataLoadError("reference data must be a list of records")
    return data


def _parse_record(index: int, record: Any) -> ReferenceReport:
    if not isinstance(record, Mapping):
        raise DataLoadError(f"record {index} is not an object")

    record = dict(record)
    # Older documents carry the ground truth under "status"
    if "groundTruthStatus" not in record and "status" in record:
        record["groundTruthStatus"] = record["status"]

    for name in REQUIRED_FIELDS:
        if name not in record:
            raise DataLoadError(f"record {index} is missing required field '{name}'", field=name)

    try:
        parsed = ReferenceRecord.model_validate(record)
    except ValidationError as e:
        first = e.errors()[0]
        name = str(first["loc"][0]) if first["loc"] else None
        name = _DOCUMENT_NAMES.get(name, name)
        raise DataLoadError(
            f"record {index} has invalid field '{name}': {first['msg']}", field=name
        ) from e

    return ReferenceReport(
        id=parsed.id if parsed.id is not None else index,
        event=parsed.event,
        location=parsed.location,
        details=parsed.details,
        ground_truth_status=parsed.ground_truth_status,
        confidence=parsed.confidence,
    )
