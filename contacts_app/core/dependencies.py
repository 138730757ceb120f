# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection: wire repositories and services.

The contact store and the archiver are owned by the application
(``app.state``) rather than by this module, so every app instance
(and every test) gets its own set.
"""

import os

from fastapi import FastAPI, Request

from contacts_app.core.config import settings
from contacts_app.repositories.contact_repository import ContactRepository
from contacts_app.services.archiver import Archiver
from contacts_app.services.contact_service import ContactService


def wire_dependencies(
    application: FastAPI,
    db_file: str | os.PathLike = settings.DB_FILE,
    archiver: Archiver | None = None,
) -> None:
    """Attach fresh repository, service and archiver instances to the app."""
    contact_repo = ContactRepository(db_file)
    application.state.contact_repo = contact_repo
    application.state.contact_service = ContactService(contact_repo=contact_repo)
    application.state.archiver = archiver or Archiver(archive_path=contact_repo.db_file)


# ── FastAPI dependency functions ──
def get_contact_repo(request: Request) -> ContactRepository:
    return request.app.state.contact_repo


def get_contact_service(request: Request) -> ContactService:
    return request.app.state.contact_service


def get_archiver(request: Request) -> Archiver:
    return request.app.state.archiver
