"""
Document API Routes

RESTful endpoints for uploading, verifying, downloading and deleting documents.
"""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    UploadFile,
)
from fastapi.responses import Response

from integrity_service.api.dependencies import (
    get_integrity_manager,
    get_request_context,
    to_http_exception,
)
from integrity_service.config.settings import settings
from integrity_service.core.exceptions import (
    DocumentNotFound,
    IntegrityServiceError,
    InvalidRequest,
    PayloadTooLarge,
)
from integrity_service.core.integrity_manager import IntegrityManager
from integrity_service.models import (
    DocumentDeleteResponse,
    DocumentListResponse,
    DocumentMetadataResponse,
    DocumentUploadResponse,
    DocumentVerifyResponse,
    RequestContext,
)

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])
logger = logging.getLogger(__name__)

MAX_FILE_NAME_LENGTH = 255


def _content_disposition(file_name: str) -> str:
    """Attachment header; names that are not plain ASCII use RFC 5987 with an ASCII fallback"""
    quoted = quote(file_name, safe="")
    if quoted == file_name:
        return f'attachment; filename="{file_name}"'
    fallback = "".join(
        c if c.isascii() and c.isprintable() and c not in '"\\' else "_"
        for c in file_name
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quoted}"


async def _read_upload(document: UploadFile) -> bytes:
    """Read an uploaded file, enforcing the configured size limit"""
    payload = await document.read()
    if len(payload) > settings.max_file_size_bytes:
        raise to_http_exception(PayloadTooLarge(
            f"File too large: {len(payload)} bytes (max: {settings.max_file_size_mb}MB)"
        ))
    return payload


@router.post(
    "/upload",
    response_model=DocumentUploadResponse,
    status_code=201,
    summary="Upload Document",
    description="""
Upload a document and record its digest.

**Workflow**:
1. Client sends multipart/form-data request with the `document` file
2. Service validates file name, size and content type
3. Computes the digest (sha256 unless `algorithm` is given)
4. Stores the file in the configured backend (local filesystem or S3)
5. Creates the document record and an `upload` audit event
6. Returns the document ID and digest

**Identifiers**: IDs are salted with the upload time, so uploading identical
bytes twice yields two distinct documents.
    """,
    responses={
        201: {"description": "Document uploaded successfully"},
        400: {"description": "Validation failed or unsupported algorithm"},
        409: {"description": "Generated document ID collided with an existing one"},
        413: {"description": "File too large (exceeds MAX_FILE_SIZE_MB)"},
        500: {"description": "Upload failed due to storage or database error"}
    }
)
async def upload_document(
    document: UploadFile = File(..., description="Document to upload"),
    algorithm: Optional[str] = Form(None, description="Digest algorithm (md5, sha1, sha256, sha512)"),
    context: RequestContext = Depends(get_request_context),
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> DocumentUploadResponse:
    """Upload document"""
    file_name = document.filename
    if not file_name or len(file_name) > MAX_FILE_NAME_LENGTH:
        raise to_http_exception(
            InvalidRequest(f"File name must be 1-{MAX_FILE_NAME_LENGTH} characters")
        )

    content_type = document.content_type or "application/octet-stream"
    if content_type not in settings.allowed_types:
        raise to_http_exception(InvalidRequest(f"File type not allowed: {content_type}"))

    payload = await _read_upload(document)

    try:
        record = await manager.upload(
            file_name=file_name,
            content_type=content_type,
            payload=payload,
            algorithm=algorithm,
            context=context
        )
    except IntegrityServiceError as e:
        raise to_http_exception(e)

    return DocumentUploadResponse(
        document_id=record.id,
        file_name=record.file_name,
        digest=record.digest,
        algorithm=record.algorithm,
        size=record.size,
        uploaded_at=record.uploaded_at
    )


@router.post(
    "/verify/{document_id}",
    response_model=DocumentVerifyResponse,
    summary="Verify Document Integrity",
    description="""
Check whether a submitted file is byte-identical to a stored document.

**Workflow**:
1. Looks up the document record
2. Recomputes the digest of the submitted file with the stored algorithm
3. Compares it to the stored digest (case-insensitive, full length)
4. Appends a `verify` audit event with both digests

A mismatch is not an error: the response has `is_valid: false`.
    """,
    responses={
        200: {"description": "Verification completed (valid or invalid)"},
        404: {"description": "Document not found"},
        413: {"description": "File too large"},
        500: {"description": "Verification failed"}
    }
)
async def verify_document(
    document_id: str,
    document: UploadFile = File(..., description="File to verify"),
    context: RequestContext = Depends(get_request_context),
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> DocumentVerifyResponse:
    """Verify document"""
    payload = await _read_upload(document)

    try:
        outcome = await manager.verify(
            document_id,
            payload,
            file_name=document.filename,
            context=context
        )
    except IntegrityServiceError as e:
        raise to_http_exception(e)

    return DocumentVerifyResponse(
        document_id=document_id,
        file_name=outcome.document.file_name,
        is_valid=outcome.is_valid,
        expected_digest=outcome.expected_digest,
        actual_digest=outcome.actual_digest,
        algorithm=outcome.algorithm
    )


@router.get(
    "",
    response_model=DocumentListResponse,
    summary="List Active Documents",
    description="Active documents, most recently uploaded first. Deleted documents are omitted.",
)
async def list_documents(
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> DocumentListResponse:
    """List active documents"""
    try:
        records = await manager.list_documents()
    except IntegrityServiceError as e:
        raise to_http_exception(e)

    return DocumentListResponse(
        documents=[DocumentMetadataResponse.from_record(r) for r in records],
        total=len(records)
    )


@router.get(
    "/{document_id}",
    response_model=DocumentMetadataResponse,
    summary="Get Document Metadata",
    description="""
Retrieve the stored record for a document, including deleted ones
(returned with `status: deleted`).
    """,
    responses={
        200: {"description": "Document metadata returned successfully"},
        404: {"description": "Document not found"}
    }
)
async def get_document(
    document_id: str,
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> DocumentMetadataResponse:
    """Get document metadata"""
    try:
        record = await manager.get_document(document_id)
    except IntegrityServiceError as e:
        raise to_http_exception(e)

    if not record:
        raise to_http_exception(DocumentNotFound(f"Document not found: {document_id}"))

    return DocumentMetadataResponse.from_record(record)


@router.get(
    "/{document_id}/download",
    summary="Download Document",
    responses={
        200: {"description": "File content"},
        404: {"description": "Document not found or deleted"},
        500: {"description": "Download failed due to storage error"}
    }
)
async def download_document(
    document_id: str,
    context: RequestContext = Depends(get_request_context),
    manager: IntegrityManager = Depends(get_integrity_manager)
):
    """Download document"""
    try:
        payload, record = await manager.download(document_id, context=context)
    except IntegrityServiceError as e:
        raise to_http_exception(e)

    return Response(
        content=payload,
        media_type=record.content_type,
        headers={"Content-Disposition": _content_disposition(record.file_name)}
    )


@router.delete(
    "/{document_id}",
    response_model=DocumentDeleteResponse,
    summary="Delete Document",
    description="""
Delete a document's stored file and mark its record deleted.

The record is kept (status `deleted`) and the audit trail gains a `delete`
event. Deleting an already deleted document returns 404.
    """,
    responses={
        200: {"description": "Document deleted successfully"},
        404: {"description": "Document not found"},
        500: {"description": "Deletion failed due to storage or database error"}
    }
)
async def delete_document(
    document_id: str,
    context: RequestContext = Depends(get_request_context),
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> DocumentDeleteResponse:
    """Delete document"""
    try:
        await manager.delete(document_id, context=context)
    except IntegrityServiceError as e:
        raise to_http_exception(e)

    return DocumentDeleteResponse(document_id=document_id)
