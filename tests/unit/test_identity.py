"""Unit tests for document id generation"""

import hashlib
import re
from datetime import datetime, timedelta, timezone

import pytest

from integrity_service.core.identity import DOCUMENT_ID_LENGTH, generate_document_id


@pytest.mark.unit
class TestGenerateDocumentId:

    def test_id_is_32_lowercase_hex(self):
        document_id = generate_document_id("a.txt", b"hello")
        assert len(document_id) == DOCUMENT_ID_LENGTH == 32
        assert re.fullmatch(r"[0-9a-f]{32}", document_id)

    def test_same_instant_same_input_is_stable(self):
        now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert generate_document_id("a.txt", b"hello", now) == generate_document_id("a.txt", b"hello", now)

    def test_different_instants_give_different_ids(self):
        now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        later = now + timedelta(milliseconds=1)
        assert generate_document_id("a.txt", b"hello", now) != generate_document_id("a.txt", b"hello", later)

    def test_name_and_content_feed_the_id(self):
        now = datetime(2026, 1, 2, tzinfo=timezone.utc)
        base = generate_document_id("a.txt", b"hello", now)
        assert generate_document_id("b.txt", b"hello", now) != base
        assert generate_document_id("a.txt", b"hellp", now) != base

    def test_derivation(self):
        now = datetime(2026, 1, 2, tzinfo=timezone.utc)
        millis = int(now.timestamp() * 1000)
        md5 = hashlib.md5(b"hello").hexdigest()
        expected = hashlib.sha256(f"a.txt_{millis}_{md5}".encode()).hexdigest()[:32]
        assert generate_document_id("a.txt", b"hello", now) == expected
