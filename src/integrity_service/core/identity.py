"""
Document Identity Generator

Identifiers are salted with the creation time, so re-uploading identical
content under the same name yields a new identifier. They are not content
addresses.
"""

import hashlib
from datetime import datetime
from typing import Optional

from integrity_service.core.digest import digest
from integrity_service.models.document import DigestAlgorithm, utcnow

DOCUMENT_ID_LENGTH = 32


def generate_document_id(file_name: str, payload: bytes, now: Optional[datetime] = None) -> str:
    """
    Derive a 32 hex character identifier for a new upload

    Args:
        file_name: Original filename
        payload: File bytes
        now: Creation instant (defaults to current UTC time)

    Returns:
        sha256("{file_name}_{epoch_millis}_{md5(payload)}") truncated to 32 characters
    """
    instant = now or utcnow()
    millis = int(instant.timestamp() * 1000)
    content_digest = digest(payload, DigestAlgorithm.MD5)
    seed = f"{file_name}_{millis}_{content_digest}".encode("utf-8")
    return hashlib.sha256(seed).hexdigest()[:DOCUMENT_ID_LENGTH]
