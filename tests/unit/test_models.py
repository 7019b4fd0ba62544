"""Unit tests for document and audit event models"""

import pytest
from pydantic import ValidationError

from integrity_service.models import (
    ALLOWED_RESULTS,
    AuditAction,
    AuditEvent,
    AuditResult,
    DeleteDetails,
    DigestAlgorithm,
    DocumentRecord,
    DocumentStatus,
    FailureDetails,
    UploadDetails,
    VerifyDetails,
)

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


def _record(**overrides):
    fields = dict(
        id="a" * 32,
        file_name="a.txt",
        content_type="text/plain",
        size=5,
        digest=HELLO_SHA256,
        algorithm=DigestAlgorithm.SHA256,
        storage_key=f"{'a' * 32}_a.txt"
    )
    fields.update(overrides)
    return DocumentRecord(**fields)


@pytest.mark.unit
class TestDocumentRecord:

    def test_defaults_to_active(self):
        record = _record()
        assert record.status == DocumentStatus.ACTIVE
        assert record.updated_at is None
        assert record.uploaded_at.tzinfo is not None

    def test_digest_length_must_match_algorithm(self):
        with pytest.raises(ValidationError):
            _record(algorithm=DigestAlgorithm.MD5)

    def test_digest_must_be_lowercase_hex(self):
        with pytest.raises(ValidationError):
            _record(digest=HELLO_SHA256.upper())

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            _record(size=-1)

    def test_record_is_immutable(self):
        record = _record()
        with pytest.raises(ValidationError):
            record.status = DocumentStatus.DELETED


@pytest.mark.unit
class TestAuditEvent:

    def test_every_action_has_allowed_results(self):
        assert set(ALLOWED_RESULTS) == set(AuditAction)

    def test_verify_allows_valid_and_invalid(self):
        for result in (AuditResult.VALID, AuditResult.INVALID):
            event = AuditEvent(
                document_id="doc",
                action=AuditAction.VERIFY,
                result=result,
                details=VerifyDetails(
                    expected_digest=HELLO_SHA256,
                    actual_digest=HELLO_SHA256,
                    algorithm=DigestAlgorithm.SHA256
                )
            )
            assert event.result == result

    def test_upload_rejects_verify_results(self):
        with pytest.raises(ValidationError):
            AuditEvent(
                document_id="doc",
                action=AuditAction.UPLOAD,
                result=AuditResult.VALID,
                details=UploadDetails(
                    file_name="a.txt", size=5, content_type="text/plain", algorithm="sha256"
                )
            )

    def test_failed_result_requires_failure_details(self):
        with pytest.raises(ValidationError):
            AuditEvent(
                document_id="doc",
                action=AuditAction.DELETE,
                result=AuditResult.FAILED,
                details=DeleteDetails(file_name="a.txt")
            )

    def test_success_details_must_match_action(self):
        with pytest.raises(ValidationError):
            AuditEvent(
                document_id="doc",
                action=AuditAction.DELETE,
                result=AuditResult.SUCCESS,
                details=UploadDetails(
                    file_name="a.txt", size=5, content_type="text/plain", algorithm="sha256"
                )
            )

    def test_failure_event(self):
        event = AuditEvent(
            document_id="doc",
            action=AuditAction.UPLOAD,
            result=AuditResult.FAILED,
            details=FailureDetails(error_kind="storage_failure", error_message="disk full")
        )
        assert event.id is None
        assert event.timestamp is None

    def test_details_parse_from_tagged_dict(self):
        event = AuditEvent.model_validate({
            "document_id": "doc",
            "action": "delete",
            "result": "success",
            "details": {"kind": "delete", "file_name": "a.txt"}
        })
        assert isinstance(event.details, DeleteDetails)
