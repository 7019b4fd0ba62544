"""
Document Integrity Data Models

Core domain models for document records and the audit trail.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Dict, FrozenSet, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


def utcnow() -> datetime:
    """Timezone-aware current UTC time"""
    return datetime.now(timezone.utc)


class DigestAlgorithm(str, Enum):
    """Supported digest algorithms"""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"


# Hex digest length per algorithm
DIGEST_LENGTHS: Dict[DigestAlgorithm, int] = {
    DigestAlgorithm.MD5: 32,
    DigestAlgorithm.SHA1: 40,
    DigestAlgorithm.SHA256: 64,
    DigestAlgorithm.SHA512: 128,
}

_LOWER_HEX = re.compile(r"^[0-9a-f]+$")


class DocumentStatus(str, Enum):
    """Document lifecycle status"""
    ACTIVE = "active"
    DELETED = "deleted"


class AuditAction(str, Enum):
    """Action recorded by an audit event"""
    UPLOAD = "upload"
    VERIFY = "verify"
    DOWNLOAD = "download"
    DELETE = "delete"


class AuditResult(str, Enum):
    """Outcome recorded by an audit event"""
    SUCCESS = "success"
    VALID = "valid"
    INVALID = "invalid"
    FAILED = "failed"


ALLOWED_RESULTS: Dict[AuditAction, FrozenSet[AuditResult]] = {
    AuditAction.UPLOAD: frozenset({AuditResult.SUCCESS, AuditResult.FAILED}),
    AuditAction.VERIFY: frozenset({AuditResult.VALID, AuditResult.INVALID, AuditResult.FAILED}),
    AuditAction.DOWNLOAD: frozenset({AuditResult.SUCCESS, AuditResult.FAILED}),
    AuditAction.DELETE: frozenset({AuditResult.SUCCESS, AuditResult.FAILED}),
}


class DocumentRecord(BaseModel):
    """Persisted metadata for one uploaded payload"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique document identifier")
    file_name: str = Field(..., min_length=1, max_length=255, description="Original filename")
    content_type: str = Field(..., description="MIME type")
    size: int = Field(..., ge=0, description="Payload size in bytes")
    digest: str = Field(..., description="Lowercase hex digest of the payload")
    algorithm: DigestAlgorithm = Field(..., description="Digest algorithm")
    status: DocumentStatus = Field(default=DocumentStatus.ACTIVE)
    storage_key: str = Field(..., description="Binary store key")
    uploaded_at: datetime = Field(default_factory=utcnow, description="Upload timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last status transition")

    @model_validator(mode="after")
    def _check_digest(self) -> "DocumentRecord":
        expected = DIGEST_LENGTHS[self.algorithm]
        if len(self.digest) != expected or not _LOWER_HEX.match(self.digest):
            raise ValueError(
                f"digest must be {expected} lowercase hex characters for {self.algorithm.value}"
            )
        return self


# Audit event details, one variant per action plus a failure variant

class UploadDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["upload"] = "upload"
    file_name: str
    size: int
    content_type: str
    algorithm: DigestAlgorithm


class VerifyDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["verify"] = "verify"
    file_name: Optional[str] = None
    expected_digest: str
    actual_digest: str
    algorithm: DigestAlgorithm


class DownloadDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["download"] = "download"
    file_name: str
    size: int


class DeleteDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["delete"] = "delete"
    file_name: str


class FailureDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    error_kind: str
    error_message: str
    file_name: Optional[str] = None
    # Upload failures: how far the upload got before failing
    blob_stored: Optional[bool] = None
    record_created: Optional[bool] = None
    # Delete failures: whether the binary was already removed
    blob_removed: Optional[bool] = None


AuditDetails = Annotated[
    Union[UploadDetails, VerifyDetails, DownloadDetails, DeleteDetails, FailureDetails],
    Field(discriminator="kind"),
]


class AuditEvent(BaseModel):
    """Immutable audit trail entry"""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Unique event identifier (assigned on append)")
    document_id: str = Field(..., description="Referenced document (not enforced)")
    action: AuditAction
    result: AuditResult
    timestamp: Optional[datetime] = Field(None, description="Insertion time (assigned on append)")
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: AuditDetails

    @model_validator(mode="after")
    def _check_outcome(self) -> "AuditEvent":
        if self.result not in ALLOWED_RESULTS[self.action]:
            raise ValueError(
                f"result '{self.result.value}' is not valid for action '{self.action.value}'"
            )
        expected_kind = "failure" if self.result == AuditResult.FAILED else self.action.value
        if self.details.kind != expected_kind:
            raise ValueError(
                f"{self.action.value}/{self.result.value} events require '{expected_kind}' details"
            )
        return self


class RequestContext(BaseModel):
    """Request provenance attached to audit events"""

    model_config = ConfigDict(frozen=True)

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
