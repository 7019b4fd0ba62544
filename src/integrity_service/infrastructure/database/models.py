"""
Database Models

SQLAlchemy ORM models for document records and the audit trail.
"""

from sqlalchemy import Column, String, Integer, DateTime, Text, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class DocumentDB(Base):
    """Document record database model"""

    __tablename__ = "documents"

    # Primary key doubles as the uniqueness constraint on document ids
    id = Column(String(64), primary_key=True)
    file_name = Column(String(255), nullable=False)
    content_type = Column(String(255), nullable=False)
    size = Column(Integer, nullable=False)
    digest = Column(String(128), nullable=False)
    algorithm = Column(String(16), nullable=False)
    status = Column(String(16), nullable=False, default="active", index=True)
    storage_key = Column(Text, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<DocumentDB(id='{self.id}', file_name='{self.file_name}', status='{self.status}')>"


class AuditEventDB(Base):
    """Audit event database model (append-only)"""

    __tablename__ = "audit_events"

    # Insertion order, used to break timestamp ties
    sequence = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(36), nullable=False, unique=True)
    document_id = Column(String(64), nullable=False, index=True)
    action = Column(String(16), nullable=False, index=True)
    result = Column(String(16), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(Text, nullable=True)
    details = Column(JSON, nullable=False)

    def __repr__(self):
        return (
            f"<AuditEventDB(event_id='{self.event_id}', document_id='{self.document_id}', "
            f"action='{self.action}', result='{self.result}')>"
        )
