"""Unit tests for local filesystem object storage"""

import hashlib

import pytest

from integrity_service.core.exceptions import StorageFailure
from integrity_service.infrastructure.storage import build_storage_key


@pytest.mark.unit
class TestLocalStorage:

    def test_storage_key_format(self):
        assert build_storage_key("abc", "report.pdf") == "abc_report.pdf"

    @pytest.mark.asyncio
    async def test_put_get_delete(self, storage):
        stored = await storage.put("doc_a.txt", b"hello", "text/plain")

        assert stored.key == "doc_a.txt"
        assert stored.etag == hashlib.md5(b"hello").hexdigest()
        assert await storage.exists("doc_a.txt")
        assert await storage.get("doc_a.txt") == b"hello"

        assert await storage.delete("doc_a.txt") is True
        assert not await storage.exists("doc_a.txt")

    @pytest.mark.asyncio
    async def test_large_payload_written_in_chunks(self, storage):
        payload = bytes(range(256)) * 1024  # 256KB

        await storage.put("doc_big.bin", payload, "application/octet-stream")

        assert await storage.get("doc_big.bin") == payload

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, storage):
        assert await storage.delete("doc_missing.txt") is False

    @pytest.mark.asyncio
    async def test_get_missing_raises(self, storage):
        with pytest.raises(StorageFailure):
            await storage.get("doc_missing.txt")

    @pytest.mark.asyncio
    async def test_path_traversal_rejected(self, storage):
        with pytest.raises(StorageFailure):
            await storage.put("../escape.txt", b"x", "text/plain")
        assert await storage.exists("../escape.txt") is False

    @pytest.mark.asyncio
    async def test_health_check(self, storage):
        assert await storage.health_check() is True
