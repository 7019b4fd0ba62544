"""
FM Integrity Service - Main Application

FastAPI application for document integrity verification and auditing.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from integrity_service import __version__
from integrity_service.config.settings import settings
from integrity_service.api.routes import (
    audit_router,
    documents_router,
    hashes_router,
    health_router,
)
from integrity_service.infrastructure.database import db_client

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info(f"Starting {settings.service_name} v{__version__} ({settings.environment})")
    logger.info(f"Database: {settings.database_url}")

    await db_client.initialize()

    yield

    # Shutdown
    logger.info("Shutting down Integrity Service")
    await db_client.close()


# Create FastAPI app
app = FastAPI(
    title="FM Integrity Service",
    description="Microservice for document digests, integrity verification and audit trails",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(documents_router)
app.include_router(audit_router)
app.include_router(hashes_router)


@app.get(
    "/",
    summary="Service Information",
    responses={
        200: {"description": "Service information returned successfully"}
    }
)
async def root():
    """Root endpoint"""
    return {
        "service": settings.service_name,
        "version": __version__,
        "status": "running",
        "environment": settings.environment
    }


# Health endpoint (simple version at root level)
@app.get(
    "/health",
    summary="Health Check",
    description="""
Lightweight liveness check with no database or storage access.

For storage and database status use `/api/v1/health`.
    """,
    responses={
        200: {"description": "Service is healthy and operational"}
    }
)
async def health():
    """Simple health check"""
    return {"status": "healthy", "service": settings.service_name}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "integrity_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=True if settings.environment == "development" else False
    )
