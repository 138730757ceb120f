# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models: pure data structures, NO FastAPI dependency.
"""

from pydantic import AliasChoices, BaseModel, Field


class Contact(BaseModel):
    """A single contact record.

    ``id == 0`` marks a contact that has not been stored yet; the
    repository allocates the real id on first save. ``errors`` maps a
    field name to a validation message and is never persisted.
    The capitalised aliases accept legacy files with capitalised keys.
    """

    id: int = Field(default=0, ge=0, validation_alias=AliasChoices("id", "ID"))
    first: str = Field(default="", validation_alias=AliasChoices("first", "First"))
    last: str = Field(default="", validation_alias=AliasChoices("last", "Last"))
    phone: str = Field(default="", validation_alias=AliasChoices("phone", "Phone"))
    email: str = Field(default="", validation_alias=AliasChoices("email", "Email"))
    errors: dict[str, str] = Field(default_factory=dict, exclude=True)

    def matches(self, text: str) -> bool:
        """Case-sensitive substring match over the searchable fields."""
        return (
            text in self.first
            or text in self.last
            or text in self.email
            or text in self.phone
        )
