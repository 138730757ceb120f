# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints (health, readiness, metrics).
Pure HTTP layer: no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from contacts_app.core.config import settings
from contacts_app.core.dependencies import get_archiver, get_contact_repo
from contacts_app.repositories.contact_repository import ContactRepository
from contacts_app.services.archiver import Archiver

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check(
    contact_repo: ContactRepository = Depends(get_contact_repo),
    archiver: Archiver = Depends(get_archiver),
):
    """Liveness check."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "contacts_count": contact_repo.count(),
        "archive_status": archiver.status().value,
    }


@router.get("/health/ready")
def readiness_check(contact_repo: ContactRepository = Depends(get_contact_repo)):
    """Readiness check: the contact store must have been loaded."""
    if not contact_repo.loaded:
        raise HTTPException(status_code=503, detail="Contact store not loaded")
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "db_file": str(contact_repo.db_file),
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
