"""
Audit Trail Store

Append-only log of audit events keyed by document id. The store offers no
update or delete, and does not check that the referenced document exists.
"""

import logging
from typing import List, Optional
from uuid import uuid4

from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from integrity_service.core.exceptions import StorageFailure
from integrity_service.infrastructure.database.document_store import as_utc
from integrity_service.infrastructure.database.models import AuditEventDB
from integrity_service.models.document import (
    AuditAction,
    AuditDetails,
    AuditEvent,
    AuditResult,
    utcnow,
)

logger = logging.getLogger(__name__)

MIN_QUERY_LIMIT = 1
MAX_QUERY_LIMIT = 1000

_details_adapter = TypeAdapter(AuditDetails)


def _to_event(row: AuditEventDB) -> AuditEvent:
    return AuditEvent(
        id=row.event_id,
        document_id=row.document_id,
        action=AuditAction(row.action),
        result=AuditResult(row.result),
        timestamp=as_utc(row.timestamp),
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        details=_details_adapter.validate_python(row.details)
    )


class AuditTrailStore:
    """Append and query audit events"""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def append(self, event: AuditEvent) -> AuditEvent:
        """
        Append an event to the trail

        Assigns an id and timestamp when the event has none.

        Returns:
            The stored event

        Raises:
            StorageFailure: If the database rejects the write
        """
        stored = event.model_copy(update={
            "id": event.id or str(uuid4()),
            "timestamp": event.timestamp or utcnow(),
        })
        row = AuditEventDB(
            event_id=stored.id,
            document_id=stored.document_id,
            action=stored.action.value,
            result=stored.result.value,
            timestamp=as_utc(stored.timestamp),
            ip_address=stored.ip_address,
            user_agent=stored.user_agent,
            details=stored.details.model_dump(mode="json")
        )
        try:
            async with self.session_maker() as session:
                session.add(row)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error logging audit event: {e}")
            raise StorageFailure(f"Failed to append audit event: {e}") from e

        logger.info(
            f"Audit event logged: {stored.action.value}/{stored.result.value} "
            f"for {stored.document_id}"
        )
        return stored

    async def query(self, document_id: Optional[str] = None, limit: int = 100) -> List[AuditEvent]:
        """
        Events ordered newest first

        Args:
            document_id: Restrict to one document; None returns events across all documents
            limit: Maximum number of events (1-1000)

        Raises:
            ValueError: If limit is out of range
            StorageFailure: If the database read fails
        """
        if not MIN_QUERY_LIMIT <= limit <= MAX_QUERY_LIMIT:
            raise ValueError(
                f"limit must be between {MIN_QUERY_LIMIT} and {MAX_QUERY_LIMIT}, got {limit}"
            )

        stmt = select(AuditEventDB)
        if document_id is not None:
            stmt = stmt.where(AuditEventDB.document_id == document_id)
        stmt = stmt.order_by(
            AuditEventDB.timestamp.desc(),
            AuditEventDB.sequence.desc()
        ).limit(limit)

        try:
            async with self.session_maker() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Error getting audit logs: {e}")
            raise StorageFailure(f"Failed to query audit events: {e}") from e

        return [_to_event(row) for row in rows]
