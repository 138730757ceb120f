# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Contact management, business logic for CRUD operations.
Coordinates repository writes with validation, metrics and logging.
"""

from contacts_app.core.config import settings
from contacts_app.core.errors import ContactNotFoundError, PageNotFoundError
from contacts_app.core.logging import get_logger
from contacts_app.metrics.prometheus import (
    CONTACT_VALIDATION_FAILURES,
    CONTACTS_CREATED,
    CONTACTS_DELETED,
    CONTACTS_STORED,
    CONTACTS_UPDATED,
)
from contacts_app.models.domain import Contact
from contacts_app.repositories.contact_repository import ContactRepository

logger = get_logger(__name__)


class ContactService:
    """Business logic for the contact store."""

    def __init__(
        self,
        contact_repo: ContactRepository,
        page_size: int = settings.PAGE_SIZE,
    ) -> None:
        self._contacts = contact_repo
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    # ── Lifecycle ──

    def load(self) -> int:
        """Load the store from disk. Raises ContactStoreError."""
        count = self._contacts.load()
        CONTACTS_STORED.set(count)
        return count

    # ── Commands ──

    def validate(self, contact: Contact) -> bool:
        """Populate ``contact.errors``; True when there are none."""
        contact.errors = {}
        if not contact.email:
            contact.errors["email"] = "Email is required"
        elif any(
            other.id != contact.id for other in self._contacts.find_by_email(contact.email)
        ):
            contact.errors["email"] = "Email must be unique"
        for field in contact.errors:
            CONTACT_VALIDATION_FAILURES.labels(field=field).inc()
        return not contact.errors

    def save(self, contact: Contact) -> bool:
        """Validate and persist. False on validation failure (store untouched).

        Raises ContactStoreError when the file cannot be written.
        """
        with self._contacts.lock:
            if not self.validate(contact):
                logger.info(
                    "Contact rejected: id=%d, errors=%s", contact.id, contact.errors
                )
                return False
            created = contact.id == 0
            self._contacts.upsert(contact)

        CONTACTS_STORED.set(self._contacts.count())
        if created:
            CONTACTS_CREATED.inc()
            logger.info("Contact created: id=%d", contact.id)
        else:
            CONTACTS_UPDATED.inc()
            logger.info("Contact updated: id=%d", contact.id)
        return True

    def delete(self, contact_id: int) -> Contact:
        """Delete a contact. Raises ContactNotFoundError / ContactStoreError."""
        removed = self._contacts.delete(contact_id)
        if removed is None:
            raise ContactNotFoundError(contact_id)
        CONTACTS_DELETED.inc()
        CONTACTS_STORED.set(self._contacts.count())
        logger.info("Contact deleted: id=%d", contact_id)
        return removed

    # ── Queries ──

    def find(self, contact_id: int) -> Contact:
        contact = self._contacts.get(contact_id)
        if contact is None:
            raise ContactNotFoundError(contact_id)
        return contact

    def search(self, text: str) -> list[Contact]:
        return [c for c in self._contacts.get_all() if c.matches(text)]

    def page(self, page: int) -> list[Contact]:
        """One page of contacts ordered by id.

        Raises ValueError for page < 1 and PageNotFoundError when the page
        starts past the last contact. Page 1 always exists.
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        contacts = self._contacts.get_all()
        start = (page - 1) * self._page_size
        if page > 1 and start >= len(contacts):
            raise PageNotFoundError(page)
        return contacts[start:start + self._page_size]

    def count(self) -> int:
        return self._contacts.count()
