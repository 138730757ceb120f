# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Contact listing, search, create, view, edit, delete.
Thin HTTP layer: delegates ALL logic to ContactService.
"""

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from pydantic import ValidationError

from contacts_app.core.dependencies import get_archiver, get_contact_service
from contacts_app.core.errors import ContactNotFoundError, ContactStoreError, PageNotFoundError
from contacts_app.core.flash import flash, get_flashed_messages
from contacts_app.core.logging import get_logger
from contacts_app.core.templating import templates
from contacts_app.models.domain import Contact
from contacts_app.schemas.contact import ContactForm
from contacts_app.services.archiver import Archiver
from contacts_app.services.contact_service import ContactService

logger = get_logger(__name__)

router = APIRouter(tags=["Contacts"])


def _parse_int(raw: str, label: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label}: {raw}")


def _bind_form(first_name: str, last_name: str, phone: str, email: str) -> ContactForm:
    try:
        return ContactForm(
            first_name=first_name, last_name=last_name, phone=phone, email=email
        )
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][-1]) for err in exc.errors())
        raise HTTPException(status_code=400, detail=f"bad request: missing or invalid {fields}")


def _find_or_404(service: ContactService, raw_id: str) -> Contact:
    contact_id = _parse_int(raw_id, "contact id")
    try:
        return service.find(contact_id)
    except ContactNotFoundError:
        raise HTTPException(status_code=404, detail=f"Contact not found: {raw_id}")


# ── Listing ──

@router.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/contacts", status_code=302)


@router.get("/contacts", response_class=HTMLResponse)
def list_contacts(
    request: Request,
    q: str = "",
    page: str = "1",
    service: ContactService = Depends(get_contact_service),
    archiver: Archiver = Depends(get_archiver),
):
    """Full contacts page, or just the rows for an active-search request."""
    page_number = _parse_int(page, "page number")
    if page_number < 1:
        raise HTTPException(status_code=400, detail=f"Invalid page number: {page}")
    logger.info("Contacts query: page=%d, search=%r", page_number, q)

    if q:
        contacts = service.search(q)
        if request.headers.get("HX-Trigger") == "search":
            return templates.TemplateResponse(request, "rows.html", {"contacts": contacts})
    else:
        try:
            contacts = service.page(page_number)
        except PageNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "contacts": contacts,
            "archive": archiver.snapshot(),
            "q": q,
            "page": page_number,
            "has_next": not q and page_number * service.page_size < service.count(),
            "flashed_messages": get_flashed_messages(request),
        },
    )


@router.get("/contacts/count", response_class=PlainTextResponse)
def count_contacts(service: ContactService = Depends(get_contact_service)):
    return f"({service.count()} total Contacts)"


# ── Create ──

@router.get("/contacts/new", response_class=HTMLResponse)
def new_contact_form(request: Request):
    return templates.TemplateResponse(request, "new.html", {"contact": Contact()})


@router.post("/contacts/new", response_class=HTMLResponse)
def create_contact(
    request: Request,
    first_name: str = Form(""),
    last_name: str = Form(""),
    phone: str = Form(""),
    email: str = Form(""),
    service: ContactService = Depends(get_contact_service),
):
    """Create a contact; re-render the form on validation or storage failure."""
    contact = _bind_form(first_name, last_name, phone, email).to_contact()
    try:
        saved = service.save(contact)
    except ContactStoreError as exc:
        logger.error("Error saving contact: %s", exc, exc_info=True)
        return templates.TemplateResponse(
            request,
            "new.html",
            {"contact": contact, "error": f"error saving contact: {exc}"},
            status_code=500,
        )
    if not saved:
        return templates.TemplateResponse(request, "new.html", {"contact": contact})

    flash(request, "Created New Contact!")
    return RedirectResponse(url="/contacts", status_code=303)


# ── View ──

@router.get("/contacts/{contact_id}", response_class=HTMLResponse)
def view_contact(
    request: Request,
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    contact = _find_or_404(service, contact_id)
    return templates.TemplateResponse(
        request,
        "show.html",
        {"contact": contact, "flashed_messages": get_flashed_messages(request)},
    )


# ── Edit ──

@router.get("/contacts/{contact_id}/edit", response_class=HTMLResponse)
def edit_contact_form(
    request: Request,
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    contact = _find_or_404(service, contact_id)
    return templates.TemplateResponse(request, "edit.html", {"contact": contact})


@router.post("/contacts/{contact_id}/edit", response_class=HTMLResponse)
def update_contact(
    request: Request,
    contact_id: str,
    first_name: str = Form(""),
    last_name: str = Form(""),
    phone: str = Form(""),
    email: str = Form(""),
    service: ContactService = Depends(get_contact_service),
):
    existing = _find_or_404(service, contact_id)
    contact = _bind_form(first_name, last_name, phone, email).to_contact(existing.id)
    try:
        saved = service.save(contact)
    except ContactStoreError as exc:
        logger.error("Error updating contact %d: %s", existing.id, exc, exc_info=True)
        return templates.TemplateResponse(
            request,
            "edit.html",
            {"contact": contact, "error": f"error saving contact: {exc}"},
            status_code=500,
        )
    if not saved:
        return templates.TemplateResponse(request, "edit.html", {"contact": contact})

    flash(request, "Updated Contact!")
    return RedirectResponse(url=f"/contacts/{existing.id}", status_code=303)


# ── Delete ──

@router.delete("/contacts/{contact_id}")
def delete_contact(
    request: Request,
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    parsed_id = _parse_int(contact_id, "contact id")
    try:
        service.delete(parsed_id)
    except ContactNotFoundError:
        raise HTTPException(status_code=404, detail=f"Contact not found: {contact_id}")
    except ContactStoreError as exc:
        raise HTTPException(status_code=500, detail=f"error deleting contact: {exc}")
    flash(request, "Deleted Contact!")
    return RedirectResponse(url="/contacts", status_code=303)
