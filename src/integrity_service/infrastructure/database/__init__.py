"""Database layer"""

from .client import DatabaseClient, db_client
from .models import AuditEventDB, Base, DocumentDB
from .document_store import DocumentRecordStore
from .audit_store import AuditTrailStore

__all__ = [
    "DatabaseClient",
    "db_client",
    "AuditEventDB",
    "Base",
    "DocumentDB",
    "DocumentRecordStore",
    "AuditTrailStore",
]
