"""Unit tests for the audit trail store"""

from datetime import datetime, timedelta, timezone

import pytest

from integrity_service.models import (
    AuditAction,
    AuditEvent,
    AuditResult,
    DeleteDetails,
    FailureDetails,
    VerifyDetails,
)

BASE_TIME = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)


def _delete_event(document_id, timestamp=None):
    return AuditEvent(
        document_id=document_id,
        action=AuditAction.DELETE,
        result=AuditResult.SUCCESS,
        timestamp=timestamp,
        details=DeleteDetails(file_name="a.txt")
    )


@pytest.mark.unit
class TestAuditTrailStore:

    @pytest.mark.asyncio
    async def test_append_assigns_id_and_timestamp(self, audit_store):
        stored = await audit_store.append(_delete_event("doc-1"))

        assert stored.id
        assert stored.timestamp is not None
        assert stored.timestamp.tzinfo is not None

    @pytest.mark.asyncio
    async def test_ids_unique_for_same_document(self, audit_store):
        first = await audit_store.append(_delete_event("doc-1"))
        second = await audit_store.append(_delete_event("doc-1"))

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_append_keeps_preassigned_values(self, audit_store):
        event = _delete_event("doc-1", timestamp=BASE_TIME).model_copy(update={"id": "evt-1"})

        stored = await audit_store.append(event)
        [loaded] = await audit_store.query("doc-1")

        assert stored.id == loaded.id == "evt-1"
        assert loaded.timestamp == BASE_TIME

    @pytest.mark.asyncio
    async def test_append_does_not_require_document(self, audit_store):
        event = AuditEvent(
            document_id="never-created",
            action=AuditAction.UPLOAD,
            result=AuditResult.FAILED,
            details=FailureDetails(error_kind="storage_failure", error_message="disk full")
        )

        await audit_store.append(event)
        [loaded] = await audit_store.query("never-created")

        assert isinstance(loaded.details, FailureDetails)
        assert loaded.details.error_message == "disk full"

    @pytest.mark.asyncio
    async def test_query_orders_newest_first(self, audit_store):
        for minutes in (5, 0, 10):
            await audit_store.append(_delete_event("doc-1", BASE_TIME + timedelta(minutes=minutes)))

        events = await audit_store.query("doc-1")

        assert [e.timestamp for e in events] == [
            BASE_TIME + timedelta(minutes=10),
            BASE_TIME + timedelta(minutes=5),
            BASE_TIME,
        ]

    @pytest.mark.asyncio
    async def test_equal_timestamps_newest_insert_first(self, audit_store):
        first = await audit_store.append(_delete_event("doc-1", BASE_TIME))
        second = await audit_store.append(_delete_event("doc-1", BASE_TIME))

        events = await audit_store.query("doc-1")

        assert [e.id for e in events] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_query_filters_by_document(self, audit_store):
        await audit_store.append(_delete_event("doc-1"))
        await audit_store.append(_delete_event("doc-2"))
        await audit_store.append(_delete_event("doc-1"))

        assert len(await audit_store.query("doc-1")) == 2
        assert len(await audit_store.query("doc-2")) == 1
        assert len(await audit_store.query()) == 3

    @pytest.mark.asyncio
    async def test_query_respects_limit(self, audit_store):
        for minutes in range(5):
            await audit_store.append(_delete_event("doc-1", BASE_TIME + timedelta(minutes=minutes)))

        events = await audit_store.query(None, limit=2)

        assert [e.timestamp for e in events] == [
            BASE_TIME + timedelta(minutes=4),
            BASE_TIME + timedelta(minutes=3),
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 1001, -5])
    async def test_query_rejects_out_of_range_limit(self, audit_store, limit):
        with pytest.raises(ValueError):
            await audit_store.query(None, limit=limit)

    @pytest.mark.asyncio
    async def test_details_roundtrip_as_tagged_union(self, audit_store):
        await audit_store.append(AuditEvent(
            document_id="doc-1",
            action=AuditAction.VERIFY,
            result=AuditResult.INVALID,
            ip_address="10.0.0.1",
            user_agent="pytest",
            details=VerifyDetails(
                file_name="a.txt",
                expected_digest="aa",
                actual_digest="bb",
                algorithm="sha256"
            )
        ))

        [event] = await audit_store.query("doc-1")

        assert isinstance(event.details, VerifyDetails)
        assert event.details.expected_digest == "aa"
        assert event.details.actual_digest == "bb"
        assert event.ip_address == "10.0.0.1"
        assert event.user_agent == "pytest"
