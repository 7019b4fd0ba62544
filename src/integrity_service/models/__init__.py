"""Data models for Integrity Service"""

from .document import (
    ALLOWED_RESULTS,
    DIGEST_LENGTHS,
    AuditAction,
    AuditDetails,
    AuditEvent,
    AuditResult,
    DeleteDetails,
    DigestAlgorithm,
    DocumentRecord,
    DocumentStatus,
    DownloadDetails,
    FailureDetails,
    RequestContext,
    UploadDetails,
    VerifyDetails,
    utcnow,
)
from .integrity import (
    ActionCounts,
    DigestComparison,
    StatsSnapshot,
    TimelineBucket,
    VerificationOutcome,
    VerificationStats,
)
from .requests import (
    AuditEventResponse,
    AuditLogResponse,
    DocumentDeleteResponse,
    DocumentListResponse,
    DocumentMetadataResponse,
    DocumentUploadResponse,
    DocumentVerifyResponse,
    HashValidationRequest,
    HashValidationResponse,
    HealthResponse,
    StatsResponse,
    TimelineResponse,
)

__all__ = [
    "ALLOWED_RESULTS",
    "DIGEST_LENGTHS",
    "AuditAction",
    "AuditDetails",
    "AuditEvent",
    "AuditResult",
    "DeleteDetails",
    "DigestAlgorithm",
    "DocumentRecord",
    "DocumentStatus",
    "DownloadDetails",
    "FailureDetails",
    "RequestContext",
    "UploadDetails",
    "VerifyDetails",
    "utcnow",
    "ActionCounts",
    "DigestComparison",
    "StatsSnapshot",
    "TimelineBucket",
    "VerificationOutcome",
    "VerificationStats",
    "AuditEventResponse",
    "AuditLogResponse",
    "DocumentDeleteResponse",
    "DocumentListResponse",
    "DocumentMetadataResponse",
    "DocumentUploadResponse",
    "DocumentVerifyResponse",
    "HashValidationRequest",
    "HashValidationResponse",
    "HealthResponse",
    "StatsResponse",
    "TimelineResponse",
]
