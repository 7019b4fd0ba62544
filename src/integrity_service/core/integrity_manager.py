"""
Integrity Manager

Upload, verify, download and delete workflows. Each workflow writes exactly
one audit event describing its final outcome. Failures are audited on a
best-effort basis and the original error is always the one raised.
"""

import logging
from typing import List, Optional, Tuple, Union

from integrity_service.core.digest import compare, digest, resolve_algorithm
from integrity_service.core.exceptions import (
    DocumentNotFound,
    IntegrityServiceError,
    StorageFailure,
)
from integrity_service.core.identity import generate_document_id
from integrity_service.core.statistics import build_stats, build_timeline
from integrity_service.infrastructure.database.audit_store import AuditTrailStore
from integrity_service.infrastructure.database.document_store import DocumentRecordStore
from integrity_service.infrastructure.storage.provider import StorageProvider, build_storage_key
from integrity_service.models.document import (
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
)
from integrity_service.models.integrity import StatsSnapshot, TimelineBucket, VerificationOutcome

logger = logging.getLogger(__name__)

_NO_CONTEXT = RequestContext()


def _as_integrity_error(error: Exception) -> IntegrityServiceError:
    if isinstance(error, IntegrityServiceError):
        return error
    return StorageFailure(f"{type(error).__name__}: {error}")


class IntegrityManager:
    """Business logic for document integrity and the audit trail"""

    def __init__(
        self,
        documents: DocumentRecordStore,
        audit: AuditTrailStore,
        storage: StorageProvider,
        default_algorithm: Union[str, DigestAlgorithm] = DigestAlgorithm.SHA256,
        stats_window: int = 1000,
    ):
        self.documents = documents
        self.audit = audit
        self.storage = storage
        self.default_algorithm = resolve_algorithm(default_algorithm)
        self.stats_window = stats_window

    async def _log_event(
        self,
        document_id: str,
        action: AuditAction,
        result: AuditResult,
        details: AuditDetails,
        context: Optional[RequestContext],
    ) -> AuditEvent:
        context = context or _NO_CONTEXT
        return await self.audit.append(AuditEvent(
            document_id=document_id,
            action=action,
            result=result,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            details=details
        ))

    async def _log_failure(
        self,
        document_id: str,
        action: AuditAction,
        error: IntegrityServiceError,
        context: Optional[RequestContext],
        file_name: Optional[str] = None,
        blob_stored: Optional[bool] = None,
        record_created: Optional[bool] = None,
        blob_removed: Optional[bool] = None,
    ) -> None:
        """Record a failed action; errors from the audit write itself are logged and dropped"""
        try:
            await self._log_event(
                document_id,
                action,
                AuditResult.FAILED,
                FailureDetails(
                    error_kind=error.kind,
                    error_message=error.message,
                    file_name=file_name,
                    blob_stored=blob_stored,
                    record_created=record_created,
                    blob_removed=blob_removed
                ),
                context
            )
        except Exception as audit_error:
            logger.error(
                f"Could not record failed {action.value} for {document_id}: {audit_error} "
                f"(original error: {error.message})"
            )

    async def upload(
        self,
        file_name: str,
        content_type: str,
        payload: bytes,
        algorithm: Union[str, DigestAlgorithm, None] = None,
        context: Optional[RequestContext] = None,
    ) -> DocumentRecord:
        """
        Store a new document and its digest

        Args:
            file_name: Original filename
            content_type: MIME type
            payload: File bytes, already validated by the caller
            algorithm: Digest algorithm (defaults to the manager's default)
            context: Request provenance for the audit trail

        Returns:
            The created DocumentRecord

        Raises:
            UnsupportedAlgorithm, DuplicateId, StorageFailure
        """
        # Generated up front so a failed upload can still be audited against an id
        document_id = generate_document_id(file_name, payload)
        storage_key = build_storage_key(document_id, file_name)
        blob_stored = False
        record_created = False

        try:
            algo = resolve_algorithm(algorithm or self.default_algorithm)
            value = digest(payload, algo)

            await self.storage.put(storage_key, payload, content_type)
            blob_stored = True

            record = await self.documents.create(DocumentRecord(
                id=document_id,
                file_name=file_name,
                content_type=content_type,
                size=len(payload),
                digest=value,
                algorithm=algo,
                storage_key=storage_key
            ))
            record_created = True

            await self._log_event(
                document_id,
                AuditAction.UPLOAD,
                AuditResult.SUCCESS,
                UploadDetails(
                    file_name=file_name,
                    size=record.size,
                    content_type=content_type,
                    algorithm=algo
                ),
                context
            )
        except Exception as e:
            error = _as_integrity_error(e)
            logger.error(f"Upload failed for {file_name}: {error.message}")
            if record_created:
                logger.warning(f"Document {document_id} is stored but its upload event was not recorded")
            await self._log_failure(
                document_id,
                AuditAction.UPLOAD,
                error,
                context,
                file_name=file_name,
                blob_stored=blob_stored,
                record_created=record_created
            )
            if error is e:
                raise
            raise error from e

        logger.info(f"Uploaded document: {document_id} ({file_name}, {algo.value}: {value[:16]}...)")
        return record

    async def verify(
        self,
        document_id: str,
        payload: bytes,
        file_name: Optional[str] = None,
        context: Optional[RequestContext] = None,
    ) -> VerificationOutcome:
        """
        Check a payload against the digest stored for a document

        Only metadata is consulted, so deleted documents can still be verified.

        Raises:
            DocumentNotFound: If no record has this id
            StorageFailure: If a store operation fails
        """
        try:
            record = await self.documents.get_by_id(document_id)
            if record is None:
                raise DocumentNotFound(f"Document not found: {document_id}")

            comparison = compare(payload, record.digest, record.algorithm)
            result = AuditResult.VALID if comparison.is_valid else AuditResult.INVALID

            await self._log_event(
                document_id,
                AuditAction.VERIFY,
                result,
                VerifyDetails(
                    file_name=file_name or record.file_name,
                    expected_digest=record.digest,
                    actual_digest=comparison.actual_digest,
                    algorithm=record.algorithm
                ),
                context
            )
        except Exception as e:
            error = _as_integrity_error(e)
            logger.error(f"Verification failed for {document_id}: {error.message}")
            await self._log_failure(document_id, AuditAction.VERIFY, error, context, file_name=file_name)
            if error is e:
                raise
            raise error from e

        logger.info(f"Verified document {document_id}: {result.value}")
        return VerificationOutcome(
            is_valid=comparison.is_valid,
            expected_digest=record.digest,
            actual_digest=comparison.actual_digest,
            algorithm=record.algorithm,
            document=record
        )

    async def download(
        self,
        document_id: str,
        context: Optional[RequestContext] = None,
    ) -> Tuple[bytes, DocumentRecord]:
        """
        Fetch the stored bytes of an active document

        Raises:
            DocumentNotFound: If no active record has this id
            StorageFailure: If the object cannot be read
        """
        record = None
        try:
            record = await self.documents.get_by_id(document_id)
            if record is None or record.status != DocumentStatus.ACTIVE:
                raise DocumentNotFound(f"Document not found: {document_id}")

            payload = await self.storage.get(record.storage_key)

            await self._log_event(
                document_id,
                AuditAction.DOWNLOAD,
                AuditResult.SUCCESS,
                DownloadDetails(file_name=record.file_name, size=len(payload)),
                context
            )
        except Exception as e:
            error = _as_integrity_error(e)
            logger.error(f"Download failed for {document_id}: {error.message}")
            await self._log_failure(
                document_id,
                AuditAction.DOWNLOAD,
                error,
                context,
                file_name=record.file_name if record else None
            )
            if error is e:
                raise
            raise error from e

        return payload, record

    async def delete(
        self,
        document_id: str,
        context: Optional[RequestContext] = None,
    ) -> DocumentRecord:
        """
        Remove a document's bytes and mark its record deleted

        The record stays retrievable by id with status=deleted.

        Raises:
            DocumentNotFound: If no active record has this id
            StorageFailure: If the object or record update fails
        """
        record = None
        blob_removed = False
        try:
            record = await self.documents.get_by_id(document_id)
            if record is None:
                raise DocumentNotFound(f"Document not found: {document_id}")
            if record.status == DocumentStatus.DELETED:
                raise DocumentNotFound(f"Document already deleted: {document_id}")

            if not await self.storage.delete(record.storage_key):
                logger.warning(f"Stored object already absent for {document_id}: {record.storage_key}")
            blob_removed = True

            updated = await self.documents.set_status(document_id, DocumentStatus.DELETED)

            await self._log_event(
                document_id,
                AuditAction.DELETE,
                AuditResult.SUCCESS,
                DeleteDetails(file_name=record.file_name),
                context
            )
        except Exception as e:
            error = _as_integrity_error(e)
            logger.error(f"Delete failed for {document_id}: {error.message}")
            await self._log_failure(
                document_id,
                AuditAction.DELETE,
                error,
                context,
                file_name=record.file_name if record else None,
                blob_removed=blob_removed if record else None
            )
            if error is e:
                raise
            raise error from e

        logger.info(f"Deleted document: {document_id}")
        return updated

    async def get_document(self, document_id: str) -> Optional[DocumentRecord]:
        return await self.documents.get_by_id(document_id)

    async def list_documents(self) -> List[DocumentRecord]:
        return await self.documents.list_active()

    async def query_audit(
        self,
        document_id: Optional[str] = None,
        limit: int = 100,
        action: Optional[AuditAction] = None,
    ) -> List[AuditEvent]:
        """Audit events newest first, optionally narrowed to one action"""
        events = await self.audit.query(document_id, limit)
        if action is not None:
            events = [event for event in events if event.action == action]
        return events

    async def stats(self) -> StatsSnapshot:
        events = await self.audit.query(None, self.stats_window)
        documents = await self.documents.list_all()
        return build_stats(events, documents)

    async def timeline(self, days: int = 7) -> List[TimelineBucket]:
        events = await self.audit.query(None, self.stats_window)
        return build_timeline(events, days)
