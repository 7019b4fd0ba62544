"""Unit tests for the document record store"""

from datetime import datetime, timedelta, timezone

import pytest

from integrity_service.core.exceptions import DocumentNotFound, DuplicateId
from integrity_service.models import DigestAlgorithm, DocumentRecord, DocumentStatus

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
BASE_TIME = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)


def _record(document_id, minutes=0, file_name="a.txt"):
    return DocumentRecord(
        id=document_id,
        file_name=file_name,
        content_type="text/plain",
        size=5,
        digest=HELLO_SHA256,
        algorithm=DigestAlgorithm.SHA256,
        storage_key=f"{document_id}_{file_name}",
        uploaded_at=BASE_TIME + timedelta(minutes=minutes)
    )


@pytest.mark.unit
class TestDocumentRecordStore:

    @pytest.mark.asyncio
    async def test_create_then_get(self, document_store):
        await document_store.create(_record("a" * 32))

        record = await document_store.get_by_id("a" * 32)

        assert record is not None
        assert record.digest == HELLO_SHA256
        assert record.status == DocumentStatus.ACTIVE
        assert record.uploaded_at == BASE_TIME

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, document_store):
        assert await document_store.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, document_store):
        await document_store.create(_record("a" * 32))

        with pytest.raises(DuplicateId):
            await document_store.create(_record("a" * 32, file_name="b.txt"))

        record = await document_store.get_by_id("a" * 32)
        assert record.file_name == "a.txt"

    @pytest.mark.asyncio
    async def test_list_active_newest_first(self, document_store):
        await document_store.create(_record("1" * 32, minutes=0))
        await document_store.create(_record("2" * 32, minutes=5))
        await document_store.create(_record("3" * 32, minutes=10))
        await document_store.set_status("2" * 32, DocumentStatus.DELETED)

        active = await document_store.list_active()

        assert [r.id for r in active] == ["3" * 32, "1" * 32]

    @pytest.mark.asyncio
    async def test_list_all_includes_deleted(self, document_store):
        await document_store.create(_record("1" * 32))
        await document_store.create(_record("2" * 32, minutes=1))
        await document_store.set_status("1" * 32, DocumentStatus.DELETED)

        records = await document_store.list_all()

        assert {r.id: r.status for r in records} == {
            "1" * 32: DocumentStatus.DELETED,
            "2" * 32: DocumentStatus.ACTIVE,
        }

    @pytest.mark.asyncio
    async def test_set_status_refreshes_updated_at(self, document_store):
        await document_store.create(_record("a" * 32))

        updated = await document_store.set_status("a" * 32, DocumentStatus.DELETED)

        assert updated.status == DocumentStatus.DELETED
        assert updated.updated_at is not None
        stored = await document_store.get_by_id("a" * 32)
        assert stored.status == DocumentStatus.DELETED
        assert stored.updated_at is not None
        assert stored.digest == HELLO_SHA256

    @pytest.mark.asyncio
    async def test_set_status_unknown_id(self, document_store):
        with pytest.raises(DocumentNotFound):
            await document_store.set_status("missing", DocumentStatus.DELETED)
