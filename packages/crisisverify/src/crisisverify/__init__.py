"""crisisverify - Incident report verification against trusted reference data."""

from crisisverify.config import VerifyConfig
from crisisverify.matcher import Matcher, verify
from crisisverify.store import DataLoadError, ReferenceStore, load, load_or_empty
from crisisverify.types import Query, ReferenceReport, Verdict
from crisisverify.verification import VerificationService, verify_after_delay

__all__ = [
    "DataLoadError",
    "Matcher",
    "Query",
    "ReferenceReport",
    "ReferenceStore",
    "Verdict",
    "VerificationService",
    "VerifyConfig",
    "load",
    "load_or_empty",
    "verify",
    "verify_after_delay",
]
