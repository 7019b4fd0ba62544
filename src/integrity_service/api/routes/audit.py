"""
Audit API Routes

Read-only endpoints over the audit trail: event logs, statistics and timeline.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from integrity_service.api.dependencies import get_integrity_manager, to_http_exception
from integrity_service.config.settings import settings
from integrity_service.core.exceptions import IntegrityServiceError, InvalidRequest
from integrity_service.core.integrity_manager import IntegrityManager
from integrity_service.models import (
    AuditAction,
    AuditEventResponse,
    AuditLogResponse,
    StatsResponse,
    TimelineResponse,
)

router = APIRouter(prefix="/api/v1/audit", tags=["audit"])
logger = logging.getLogger(__name__)


@router.get(
    "/logs",
    response_model=AuditLogResponse,
    summary="Query Audit Logs",
    description="""
Audit events across all documents (or one, with `document_id`), newest first.

**Query Parameters**:
- document_id: Restrict to one document
- limit: Maximum events read from the trail, 1-1000 (default: 100)
- action: Keep only upload/verify/download/delete events; applied after the limit
    """,
)
async def get_audit_logs(
    document_id: Optional[str] = Query(None, description="Document ID filter"),
    limit: int = Query(
        settings.default_audit_limit, ge=1, le=settings.max_audit_limit, description="Maximum events"
    ),
    action: Optional[AuditAction] = Query(None, description="Action filter"),
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> AuditLogResponse:
    """Get audit logs"""
    try:
        events = await manager.query_audit(document_id=document_id, limit=limit, action=action)
    except IntegrityServiceError as e:
        raise to_http_exception(e)

    return AuditLogResponse(
        document_id=document_id,
        logs=[AuditEventResponse.from_event(e) for e in events],
        total=len(events)
    )


@router.get(
    "/logs/{document_id}",
    response_model=AuditLogResponse,
    summary="Get Document Audit Logs",
    description="Audit events for one document, newest first. Unknown IDs return an empty list.",
)
async def get_document_audit_logs(
    document_id: str,
    limit: int = Query(settings.default_audit_limit, ge=1, le=settings.max_audit_limit),
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> AuditLogResponse:
    """Get audit logs for specific document"""
    try:
        events = await manager.query_audit(document_id=document_id, limit=limit)
    except IntegrityServiceError as e:
        raise to_http_exception(e)

    return AuditLogResponse(
        document_id=document_id,
        logs=[AuditEventResponse.from_event(e) for e in events],
        total=len(events)
    )


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="System Statistics",
    description="""
Document counts plus action and verification counts over the most recent
audit events (STATS_WINDOW, default 1000). `valid_rate` is a percentage
with two decimals, 0 when nothing was verified.
    """,
)
async def get_stats(
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> StatsResponse:
    """Get system statistics"""
    try:
        stats = await manager.stats()
    except IntegrityServiceError as e:
        raise to_http_exception(e)

    return StatsResponse(stats=stats)


@router.get(
    "/timeline",
    response_model=TimelineResponse,
    summary="Activity Timeline",
    description="Per-day action counts (UTC dates, ascending) over the trailing `days` window.",
)
async def get_timeline(
    days: int = Query(settings.default_timeline_days, ge=1, le=365, description="Window in days"),
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> TimelineResponse:
    """Get activity timeline"""
    try:
        timeline = await manager.timeline(days)
    except IntegrityServiceError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise to_http_exception(InvalidRequest(str(e)))

    return TimelineResponse(timeline=timeline, period=f"{days} days")
