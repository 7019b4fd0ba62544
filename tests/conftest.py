"""Shared fixtures: file-backed SQLite database, local object storage, manager"""

import pytest
import pytest_asyncio

from integrity_service.core.integrity_manager import IntegrityManager
from integrity_service.infrastructure.database import (
    AuditTrailStore,
    DatabaseClient,
    DocumentRecordStore,
)
from integrity_service.infrastructure.storage import LocalStorage


@pytest_asyncio.fixture
async def database(tmp_path):
    """Initialized database client on a throwaway SQLite file"""
    client = DatabaseClient(database_url=f"sqlite+aiosqlite:///{tmp_path / 'integrity.db'}")
    await client.initialize()
    yield client
    await client.close()


@pytest.fixture
def document_store(database):
    return DocumentRecordStore(database.get_session_maker())


@pytest.fixture
def audit_store(database):
    return AuditTrailStore(database.get_session_maker())


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(base_path=str(tmp_path / "objects"))


@pytest.fixture
def manager(document_store, audit_store, storage):
    return IntegrityManager(
        documents=document_store,
        audit=audit_store,
        storage=storage,
        default_algorithm="sha256"
    )
