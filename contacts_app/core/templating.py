# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Jinja2 template environment shared by all HTML controllers."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
