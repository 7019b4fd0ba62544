"""
Integrity Result Models

Values produced by digest comparison, verification and audit aggregation.
"""

import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .document import AuditEvent, DigestAlgorithm, DocumentRecord


class DigestComparison(BaseModel):
    """Outcome of recomputing and comparing a digest"""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    actual_digest: str
    expected_digest: str
    algorithm: DigestAlgorithm


class VerificationOutcome(BaseModel):
    """Result of verifying a payload against a stored document"""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    expected_digest: str
    actual_digest: str
    algorithm: DigestAlgorithm
    document: DocumentRecord


class ActionCounts(BaseModel):
    upload: int = 0
    verify: int = 0
    download: int = 0
    delete: int = 0


class VerificationStats(BaseModel):
    total: int = 0
    valid: int = 0
    invalid: int = 0
    failed: int = 0
    valid_rate: float = Field(0.0, description="Percentage of valid verifications (2 dp)")


class StatsSnapshot(BaseModel):
    """Aggregate counts derived from documents and recent audit events"""

    total_documents: int
    active_documents: int
    deleted_documents: int
    total_audit_events: int
    recent_activity: List[AuditEvent] = Field(default_factory=list)
    action_counts: ActionCounts
    verification_stats: VerificationStats


class TimelineBucket(BaseModel):
    """Per-day action counts"""

    date: datetime.date
    upload: int = 0
    verify: int = 0
    download: int = 0
    delete: int = 0
    total: int = 0
