"""Unit tests for stats and timeline aggregation"""

from datetime import date, datetime, timedelta, timezone

import pytest

from integrity_service.core.statistics import build_stats, build_timeline
from integrity_service.models import (
    AuditAction,
    AuditEvent,
    AuditResult,
    DeleteDetails,
    DigestAlgorithm,
    DocumentRecord,
    DocumentStatus,
    FailureDetails,
    UploadDetails,
    VerifyDetails,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


def _event(action, result, timestamp=NOW):
    if result == AuditResult.FAILED:
        details = FailureDetails(error_kind="storage_failure", error_message="boom")
    elif action == AuditAction.UPLOAD:
        details = UploadDetails(file_name="a.txt", size=5, content_type="text/plain", algorithm="sha256")
    elif action == AuditAction.VERIFY:
        details = VerifyDetails(expected_digest="x", actual_digest="x", algorithm="sha256")
    else:
        details = DeleteDetails(file_name="a.txt")
    return AuditEvent(
        id=f"evt-{action.value}-{timestamp.isoformat()}",
        document_id="doc",
        action=action,
        result=result,
        timestamp=timestamp,
        details=details
    )


def _document(document_id, status):
    return DocumentRecord(
        id=document_id,
        file_name="a.txt",
        content_type="text/plain",
        size=5,
        digest=HELLO_SHA256,
        algorithm=DigestAlgorithm.SHA256,
        status=status,
        storage_key=f"{document_id}_a.txt"
    )


@pytest.mark.unit
class TestBuildStats:

    def test_empty_inputs(self):
        stats = build_stats([], [])
        assert stats.total_documents == 0
        assert stats.total_audit_events == 0
        assert stats.verification_stats.total == 0
        assert stats.verification_stats.valid_rate == 0
        assert stats.action_counts.upload == 0

    def test_counts(self):
        events = [
            _event(AuditAction.UPLOAD, AuditResult.SUCCESS),
            _event(AuditAction.UPLOAD, AuditResult.FAILED),
            _event(AuditAction.VERIFY, AuditResult.VALID),
            _event(AuditAction.VERIFY, AuditResult.VALID),
            _event(AuditAction.VERIFY, AuditResult.INVALID),
            _event(AuditAction.DELETE, AuditResult.SUCCESS),
        ]
        documents = [
            _document("1" * 32, DocumentStatus.ACTIVE),
            _document("2" * 32, DocumentStatus.DELETED),
            _document("3" * 32, DocumentStatus.ACTIVE),
        ]

        stats = build_stats(events, documents)

        assert stats.total_documents == 3
        assert stats.active_documents == 2
        assert stats.deleted_documents == 1
        assert stats.total_audit_events == 6
        assert stats.action_counts.upload == 2
        assert stats.action_counts.verify == 3
        assert stats.action_counts.download == 0
        assert stats.action_counts.delete == 1
        assert stats.verification_stats.valid == 2
        assert stats.verification_stats.invalid == 1
        assert stats.verification_stats.failed == 0
        assert stats.verification_stats.valid_rate == 66.67

    def test_recent_activity_keeps_ten_newest(self):
        events = [
            _event(AuditAction.UPLOAD, AuditResult.SUCCESS, NOW - timedelta(minutes=i))
            for i in range(15)
        ]
        stats = build_stats(events, [])
        assert len(stats.recent_activity) == 10
        assert stats.recent_activity[0].timestamp == NOW


@pytest.mark.unit
class TestBuildTimeline:

    def test_one_day_window_excludes_older_events(self):
        events = [
            _event(AuditAction.UPLOAD, AuditResult.SUCCESS, NOW - timedelta(hours=1)),
            _event(AuditAction.VERIFY, AuditResult.VALID, NOW - timedelta(hours=23)),
            _event(AuditAction.DELETE, AuditResult.SUCCESS, NOW - timedelta(hours=25)),
        ]

        timeline = build_timeline(events, days=1, now=NOW)

        assert sum(bucket.total for bucket in timeline) == 2
        assert sum(bucket.delete for bucket in timeline) == 0

    def test_buckets_sorted_ascending_by_date(self):
        events = [
            _event(AuditAction.UPLOAD, AuditResult.SUCCESS, NOW),
            _event(AuditAction.VERIFY, AuditResult.INVALID, NOW - timedelta(days=2)),
            _event(AuditAction.VERIFY, AuditResult.VALID, NOW - timedelta(days=2, hours=1)),
            _event(AuditAction.UPLOAD, AuditResult.FAILED, NOW - timedelta(days=1)),
        ]

        timeline = build_timeline(events, days=7, now=NOW)

        assert [bucket.date for bucket in timeline] == [
            date(2026, 10, 17), date(2026, 10, 18), date(2026, 10, 19)
        ]
        assert timeline[0].verify == 2
        assert timeline[0].total == 2
        assert timeline[1].upload == 1
        assert timeline[2].upload == 1

    def test_empty_window(self):
        assert build_timeline([], days=7, now=NOW) == []

    def test_days_must_be_positive(self):
        with pytest.raises(ValueError):
            build_timeline([], days=0, now=NOW)
