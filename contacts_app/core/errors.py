# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain exceptions: raised by repositories and services,
translated to HTTP status codes by the controllers.
"""


class ContactStoreError(Exception):
    """The contacts file could not be read, parsed or written."""


class ContactNotFoundError(KeyError):
    """No contact is stored under the requested id."""

    def __init__(self, contact_id: int) -> None:
        super().__init__(f"contact with id {contact_id} not found")
        self.contact_id = contact_id

    def __str__(self) -> str:
        return self.args[0]


class PageNotFoundError(KeyError):
    """The requested listing page starts past the last contact."""

    def __init__(self, page: int) -> None:
        super().__init__(f"page {page} not found")
        self.page = page

    def __str__(self) -> str:
        return self.args[0]
