# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Contacts App
============
Server-rendered contact management: list / search / paginate contacts,
create, view, edit and delete them, and run a simulated background
archive job whose progress the page polls.

Contacts live in memory and are written wholesale to a JSON file on
every change. The archiver is a single background job per process:

    Waiting ─► Running ─► Complete
       ▲          │           │
       └── reset ─┴── reset ──┘

Port: 8080
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from contacts_app.controllers import archive_controller, contact_controller, system_controller
from contacts_app.core.config import settings
from contacts_app.core.dependencies import wire_dependencies
from contacts_app.core.logging import get_logger
from contacts_app.core.templating import STATIC_DIR
from contacts_app.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger("contacts-app")

if not settings.SESSION_SECRET:
    logger.critical("CONTACTS_SESSION_KEY environment variable is required")
    raise RuntimeError("CONTACTS_SESSION_KEY environment variable is required")


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Load the contact store (fatal on failure); stop the archiver on shutdown."""
    count = application.state.contact_service.load()
    logger.info("Contacts app starting, %d contacts loaded", count)
    yield
    archiver = application.state.archiver
    archiver.reset()
    archiver.join(timeout=settings.ARCHIVE_TIME_UNIT * 2)
    logger.info("Contacts app shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Contacts App",
    description="Server-rendered contact management with a background archiver.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)
wire_dependencies(app)

app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie=settings.SESSION_COOKIE_NAME,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


# ── Routers (archive before contacts so /contacts/archive is not an id) ──
app.include_router(system_controller.router)
app.include_router(archive_controller.router)
app.include_router(contact_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
