"""
Document Record Store

Durable table of document metadata keyed by document id.
Records are never removed; deletion is a status transition.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from integrity_service.core.exceptions import DocumentNotFound, DuplicateId, StorageFailure
from integrity_service.infrastructure.database.models import DocumentDB
from integrity_service.models.document import (
    DigestAlgorithm,
    DocumentRecord,
    DocumentStatus,
    utcnow,
)

logger = logging.getLogger(__name__)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from the database"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_record(row: DocumentDB) -> DocumentRecord:
    return DocumentRecord(
        id=row.id,
        file_name=row.file_name,
        content_type=row.content_type,
        size=row.size,
        digest=row.digest,
        algorithm=DigestAlgorithm(row.algorithm),
        status=DocumentStatus(row.status),
        storage_key=row.storage_key,
        uploaded_at=as_utc(row.uploaded_at),
        updated_at=as_utc(row.updated_at)
    )


class DocumentRecordStore:
    """Create, look up, list and transition document records"""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def create(self, record: DocumentRecord) -> DocumentRecord:
        """
        Persist a new document record

        Raises:
            DuplicateId: If a record with the same id already exists
            StorageFailure: If the database rejects the write
        """
        row = DocumentDB(
            id=record.id,
            file_name=record.file_name,
            content_type=record.content_type,
            size=record.size,
            digest=record.digest,
            algorithm=record.algorithm.value,
            status=record.status.value,
            storage_key=record.storage_key,
            uploaded_at=as_utc(record.uploaded_at),
            updated_at=as_utc(record.updated_at)
        )
        try:
            async with self.session_maker() as session:
                session.add(row)
                await session.commit()
        except IntegrityError as e:
            logger.warning(f"Duplicate document id rejected: {record.id}")
            raise DuplicateId(f"Document id already exists: {record.id}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error storing document record {record.id}: {e}")
            raise StorageFailure(f"Failed to store document record: {e}") from e

        logger.info(f"Document record stored: {record.id} ({record.file_name})")
        return record

    async def get_by_id(self, document_id: str) -> Optional[DocumentRecord]:
        """Point lookup by primary key; returns None when absent"""
        try:
            async with self.session_maker() as session:
                row = await session.get(DocumentDB, document_id)
        except SQLAlchemyError as e:
            logger.error(f"Error reading document record {document_id}: {e}")
            raise StorageFailure(f"Failed to read document record: {e}") from e

        return _to_record(row) if row else None

    async def list_active(self) -> List[DocumentRecord]:
        """Active records, most recently uploaded first"""
        stmt = (
            select(DocumentDB)
            .where(DocumentDB.status == DocumentStatus.ACTIVE.value)
            .order_by(DocumentDB.uploaded_at.desc())
        )
        return await self._fetch(stmt)

    async def list_all(self) -> List[DocumentRecord]:
        """Every record regardless of status, most recently uploaded first"""
        stmt = select(DocumentDB).order_by(DocumentDB.uploaded_at.desc())
        return await self._fetch(stmt)

    async def set_status(self, document_id: str, status: DocumentStatus) -> DocumentRecord:
        """
        Set a record's status and refresh updated_at

        Raises:
            DocumentNotFound: If no record has this id
            StorageFailure: If the database rejects the update
        """
        try:
            async with self.session_maker() as session:
                row = await session.get(DocumentDB, document_id)
                if row is None:
                    raise DocumentNotFound(f"Document not found: {document_id}")

                row.status = status.value
                row.updated_at = utcnow()
                await session.commit()
                record = _to_record(row)
        except SQLAlchemyError as e:
            logger.error(f"Error updating document status for {document_id}: {e}")
            raise StorageFailure(f"Failed to update document status: {e}") from e

        logger.info(f"Document {document_id} status set to {status.value}")
        return record

    async def _fetch(self, stmt) -> List[DocumentRecord]:
        try:
            async with self.session_maker() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing document records: {e}")
            raise StorageFailure(f"Failed to list document records: {e}") from e

        return [_to_record(row) for row in rows]
