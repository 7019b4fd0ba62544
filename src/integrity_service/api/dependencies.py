"""
API Dependencies

Builds the IntegrityManager for each request from the process-wide database
client and storage provider, and maps typed errors to HTTP responses.
"""

from fastapi import HTTPException, Request

from integrity_service.config.settings import settings
from integrity_service.core.exceptions import (
    DocumentNotFound,
    DuplicateId,
    IntegrityServiceError,
    InvalidRequest,
    PayloadTooLarge,
    UnsupportedAlgorithm,
)
from integrity_service.core.integrity_manager import IntegrityManager
from integrity_service.infrastructure.database import AuditTrailStore, DocumentRecordStore, db_client
from integrity_service.infrastructure.storage import get_storage_provider
from integrity_service.models import RequestContext

STATUS_BY_ERROR = {
    InvalidRequest: 400,
    UnsupportedAlgorithm: 400,
    DocumentNotFound: 404,
    DuplicateId: 409,
    PayloadTooLarge: 413,
}


def get_integrity_manager() -> IntegrityManager:
    """Dependency for getting IntegrityManager instance"""
    session_maker = db_client.get_session_maker()
    return IntegrityManager(
        documents=DocumentRecordStore(session_maker),
        audit=AuditTrailStore(session_maker),
        storage=get_storage_provider(),
        default_algorithm=settings.default_algorithm,
        stats_window=settings.stats_window
    )


def get_request_context(request: Request) -> RequestContext:
    """Dependency capturing caller provenance for the audit trail"""
    return RequestContext(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent")
    )


def to_http_exception(error: IntegrityServiceError) -> HTTPException:
    """Translate a typed error into an HTTPException (storage failures map to 500)"""
    status_code = STATUS_BY_ERROR.get(type(error), 500)
    return HTTPException(status_code=status_code, detail=error.to_dict())
