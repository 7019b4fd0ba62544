"""
Integrity Service Errors

Typed error kinds surfaced by the integrity workflow and its stores.
Every error carries a stable ``kind`` string plus a human-readable message.
"""


class IntegrityServiceError(Exception):
    """Base class for all integrity service failures"""

    kind = "integrity_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class UnsupportedAlgorithm(IntegrityServiceError):
    """Requested digest algorithm is outside the supported set"""

    kind = "unsupported_algorithm"


class DuplicateId(IntegrityServiceError):
    """A document record with the same identifier already exists"""

    kind = "duplicate_id"


class DocumentNotFound(IntegrityServiceError):
    """No document record matches the identifier"""

    kind = "document_not_found"


class StorageFailure(IntegrityServiceError):
    """The database or binary storage backend rejected an operation"""

    kind = "storage_failure"


class PayloadTooLarge(IntegrityServiceError):
    """Payload exceeds the configured upload size limit"""

    kind = "payload_too_large"


class InvalidRequest(IntegrityServiceError):
    """Caller input rejected before any workflow ran"""

    kind = "invalid_request"
