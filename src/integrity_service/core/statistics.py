"""
Statistics and Timeline Aggregation

Pure reductions over audit events and document records. Nothing is cached;
every call recomputes from its inputs.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from integrity_service.models.document import (
    AuditAction,
    AuditEvent,
    AuditResult,
    DocumentRecord,
    DocumentStatus,
    utcnow,
)
from integrity_service.models.integrity import (
    ActionCounts,
    StatsSnapshot,
    TimelineBucket,
    VerificationStats,
)

RECENT_ACTIVITY_SIZE = 10


def count_actions(events: Iterable[AuditEvent]) -> ActionCounts:
    counts = {action.value: 0 for action in AuditAction}
    for event in events:
        counts[event.action.value] += 1
    return ActionCounts(**counts)


def verification_stats(events: Iterable[AuditEvent]) -> VerificationStats:
    """Verify outcome counts and valid rate (0 when there are no verifications)"""
    outcomes = {result: 0 for result in AuditResult}
    for event in events:
        if event.action == AuditAction.VERIFY:
            outcomes[event.result] += 1

    total = outcomes[AuditResult.VALID] + outcomes[AuditResult.INVALID] + outcomes[AuditResult.FAILED]
    valid_rate = round(outcomes[AuditResult.VALID] / total * 100, 2) if total else 0.0

    return VerificationStats(
        total=total,
        valid=outcomes[AuditResult.VALID],
        invalid=outcomes[AuditResult.INVALID],
        failed=outcomes[AuditResult.FAILED],
        valid_rate=valid_rate
    )


def build_stats(
    events: Sequence[AuditEvent],
    documents: Sequence[DocumentRecord],
) -> StatsSnapshot:
    """
    Summarize documents and audit events

    Args:
        events: Audit events, newest first
        documents: Current document records of every status

    Returns:
        StatsSnapshot with document, action and verification counts
    """
    active = sum(1 for doc in documents if doc.status == DocumentStatus.ACTIVE)
    deleted = sum(1 for doc in documents if doc.status == DocumentStatus.DELETED)

    return StatsSnapshot(
        total_documents=len(documents),
        active_documents=active,
        deleted_documents=deleted,
        total_audit_events=len(events),
        recent_activity=list(events[:RECENT_ACTIVITY_SIZE]),
        action_counts=count_actions(events),
        verification_stats=verification_stats(events)
    )


def _event_date(timestamp: datetime) -> date:
    if timestamp.tzinfo is None:
        return timestamp.date()
    return timestamp.astimezone(timezone.utc).date()


def build_timeline(
    events: Iterable[AuditEvent],
    days: int,
    now: Optional[datetime] = None,
) -> List[TimelineBucket]:
    """
    Per-day action counts for events within the trailing window

    Args:
        events: Audit events in any order
        days: Window length in days (>= 1), measured back from now
        now: Reference instant (defaults to current UTC time)

    Returns:
        Buckets keyed by UTC calendar date, ascending; days without events are omitted
    """
    if days < 1:
        raise ValueError(f"days must be at least 1, got {days}")

    cutoff = (now or utcnow()) - timedelta(days=days)
    buckets: Dict[date, Dict[str, int]] = {}

    for event in events:
        if event.timestamp is None or event.timestamp < cutoff:
            continue
        bucket = buckets.setdefault(
            _event_date(event.timestamp),
            {action.value: 0 for action in AuditAction}
        )
        bucket[event.action.value] += 1

    return [
        TimelineBucket(date=day, total=sum(counts.values()), **counts)
        for day, counts in sorted(buckets.items())
    ]
