# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / view schemas: contracts at the controller (HTTP) boundary.
"""

from pydantic import BaseModel, ConfigDict, Field

from contacts_app.models.domain import Contact


# ── Contact form ──

class ContactForm(BaseModel):
    """Fields posted by the new/edit contact forms. All are required."""
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=1, max_length=255)

    def to_contact(self, contact_id: int = 0) -> Contact:
        return Contact(
            id=contact_id,
            first=self.first_name,
            last=self.last_name,
            phone=self.phone,
            email=self.email,
        )


# ── Archive view ──

class ArchiveSnapshot(BaseModel):
    """Point-in-time view of the archiver rendered by the archive fragment."""
    status: str
    progress: float = Field(..., ge=0.0, le=1.0)
    archive_file: str

    @property
    def progress_percentage(self) -> float:
        return self.progress * 100
