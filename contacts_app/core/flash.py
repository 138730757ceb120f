# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Session-backed flash messages (shown once on the next rendered page)."""

from fastapi import Request

FLASH_SESSION_KEY = "_flashes"


def flash(request: Request, message: str) -> None:
    flashes = list(request.session.get(FLASH_SESSION_KEY, []))
    flashes.append(message)
    request.session[FLASH_SESSION_KEY] = flashes


def get_flashed_messages(request: Request) -> list[str]:
    """Return and clear the pending messages."""
    return request.session.pop(FLASH_SESSION_KEY, [])
