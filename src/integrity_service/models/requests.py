"""
API Request and Response Models

Pydantic models for API input/output validation.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .document import (
    AuditAction,
    AuditDetails,
    AuditEvent,
    AuditResult,
    DigestAlgorithm,
    DocumentRecord,
    DocumentStatus,
    utcnow,
)
from .integrity import StatsSnapshot, TimelineBucket


class DocumentUploadResponse(BaseModel):
    """Response after successful document upload"""

    document_id: str = Field(..., description="Unique document identifier")
    file_name: str = Field(..., description="Original filename")
    digest: str = Field(..., description="Lowercase hex digest")
    algorithm: DigestAlgorithm = Field(..., description="Digest algorithm")
    size: int = Field(..., description="File size in bytes")
    uploaded_at: datetime = Field(..., description="Upload timestamp")
    message: str = Field(default="Document uploaded successfully")


class DocumentVerifyResponse(BaseModel):
    """Response after verifying a document against its stored digest"""

    document_id: str
    file_name: str
    is_valid: bool
    expected_digest: str
    actual_digest: str
    algorithm: DigestAlgorithm
    verified_at: datetime = Field(default_factory=utcnow)


class DocumentMetadataResponse(BaseModel):
    """Document metadata response"""

    id: str
    file_name: str
    content_type: str
    size: int
    digest: str
    algorithm: DigestAlgorithm
    status: DocumentStatus
    uploaded_at: datetime
    updated_at: Optional[datetime]

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentMetadataResponse":
        """Create response from DocumentRecord model"""
        return cls(
            id=record.id,
            file_name=record.file_name,
            content_type=record.content_type,
            size=record.size,
            digest=record.digest,
            algorithm=record.algorithm,
            status=record.status,
            uploaded_at=record.uploaded_at,
            updated_at=record.updated_at
        )


class DocumentListResponse(BaseModel):
    """Active documents, newest first"""

    documents: List[DocumentMetadataResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0)


class DocumentDeleteResponse(BaseModel):
    message: str = Field(default="Document deleted successfully")
    document_id: str


class AuditEventResponse(BaseModel):
    """Single audit trail entry"""

    id: str
    document_id: str
    action: AuditAction
    result: AuditResult
    timestamp: datetime
    ip_address: Optional[str]
    user_agent: Optional[str]
    details: AuditDetails

    @classmethod
    def from_event(cls, event: AuditEvent) -> "AuditEventResponse":
        return cls(
            id=event.id,
            document_id=event.document_id,
            action=event.action,
            result=event.result,
            timestamp=event.timestamp,
            ip_address=event.ip_address,
            user_agent=event.user_agent,
            details=event.details
        )


class AuditLogResponse(BaseModel):
    """Audit events, newest first"""

    document_id: Optional[str] = None
    logs: List[AuditEventResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0)


class StatsResponse(BaseModel):
    stats: StatsSnapshot
    generated_at: datetime = Field(default_factory=utcnow)


class TimelineResponse(BaseModel):
    timeline: List[TimelineBucket] = Field(default_factory=list)
    period: str
    generated_at: datetime = Field(default_factory=utcnow)


class HashValidationRequest(BaseModel):
    """Request to check the format of a hex digest"""

    hash: str = Field(..., min_length=1, description="Hex digest to check")
    algorithm: str = Field(default="sha256", description="Digest algorithm name")


class HashValidationResponse(BaseModel):
    is_valid: bool
    algorithm: DigestAlgorithm
    expected_length: int
    actual_length: int


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(default="healthy")
    service: str = Field(default="fm-integrity-service")
    timestamp: datetime = Field(default_factory=utcnow)
    storage_available: bool = Field(default=True)
    database_available: bool = Field(default=True)
