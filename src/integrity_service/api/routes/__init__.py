"""API routers"""

from .audit import router as audit_router
from .documents import router as documents_router
from .hashes import router as hashes_router
from .health import router as health_router

__all__ = ["audit_router", "documents_router", "hashes_router", "health_router"]
