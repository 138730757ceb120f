# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Archive endpoints (start, poll, reset, download).
Thin HTTP layer: delegates ALL logic to the Archiver.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse

from contacts_app.core.dependencies import get_archiver
from contacts_app.core.templating import templates
from contacts_app.services.archiver import Archiver

router = APIRouter(prefix="/contacts/archive", tags=["Archive"])


def _render(request: Request, archiver: Archiver) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "archive_ui.html", {"archive": archiver.snapshot()}
    )


@router.post("", response_class=HTMLResponse)
def start_archive(request: Request, archiver: Archiver = Depends(get_archiver)):
    """Start an archive run (no-op if one is running or complete)."""
    archiver.start()
    return _render(request, archiver)


@router.get("", response_class=HTMLResponse)
def get_archive_status(request: Request, archiver: Archiver = Depends(get_archiver)):
    """Poll the archiver without side effects."""
    return _render(request, archiver)


@router.delete("", response_class=HTMLResponse)
def reset_archive(request: Request, archiver: Archiver = Depends(get_archiver)):
    """Reset to Waiting, abandoning any run in flight."""
    archiver.reset()
    return _render(request, archiver)


@router.get("/file")
def download_archive_file(archiver: Archiver = Depends(get_archiver)):
    """Download the archive artifact."""
    path = archiver.archive_path()
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"Archive file not found: {path.name}")
    return FileResponse(
        path,
        filename=archiver.archive_file(),
        media_type="application/json",
    )
