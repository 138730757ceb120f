# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Contact data access.
In-memory map keyed by id, persisted wholesale to a JSON file on every
mutation. NO business rules here: pure CRUD plus id allocation.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from contacts_app.core.errors import ContactStoreError
from contacts_app.core.logging import get_logger
from contacts_app.models.domain import Contact

logger = get_logger(__name__)


class ContactRepository:
    """JSON-file backed contact storage.

    Every mutation runs under a single re-entrant writer lock and either
    reaches disk or is rolled back in memory.
    """

    def __init__(self, db_file: str | os.PathLike) -> None:
        self._db_file = Path(db_file)
        self._store: dict[int, Contact] = {}
        self._last_id = 0
        self._loaded = False
        self._lock = threading.RLock()

    @property
    def db_file(self) -> Path:
        return self._db_file

    @property
    def lock(self) -> threading.RLock:
        """Writer lock; hold it to make a read-check-write sequence atomic."""
        return self._lock

    @property
    def loaded(self) -> bool:
        return self._loaded

    # ── Read ──

    def get(self, contact_id: int) -> Optional[Contact]:
        with self._lock:
            contact = self._store.get(contact_id)
            return contact.model_copy(deep=True) if contact else None

    def get_all(self) -> list[Contact]:
        """All contacts ordered by id."""
        with self._lock:
            return [
                self._store[cid].model_copy(deep=True) for cid in sorted(self._store)
            ]

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    def find_by_email(self, email: str) -> list[Contact]:
        with self._lock:
            return [c.model_copy() for c in self._store.values() if c.email == email]

    # ── Write ──

    def upsert(self, contact: Contact) -> Contact:
        """Insert or replace ``contact`` and persist. Allocates an id when unset.

        On a write failure the map, the id counter and ``contact.id`` are
        restored and ContactStoreError is raised.
        """
        with self._lock:
            previous_store = dict(self._store)
            previous_last_id = self._last_id
            allocated = contact.id == 0
            if allocated:
                contact.id = self._last_id + 1
            self._last_id = max(self._last_id, contact.id)
            self._store[contact.id] = contact.model_copy(deep=True, update={"errors": {}})
            try:
                self._write()
            except ContactStoreError:
                self._store = previous_store
                self._last_id = previous_last_id
                if allocated:
                    contact.id = 0
                raise
            return contact

    def delete(self, contact_id: int) -> Optional[Contact]:
        """Remove and persist. Returns None (file untouched) when absent."""
        with self._lock:
            if contact_id not in self._store:
                return None
            previous_store = dict(self._store)
            removed = self._store.pop(contact_id)
            try:
                self._write()
            except ContactStoreError:
                self._store = previous_store
                raise
            return removed

    # ── Persistence ──

    def load(self) -> int:
        """Rebuild the map from the JSON file. A missing file is an empty store."""
        with self._lock:
            if not self._db_file.exists():
                logger.info("Contacts file %s not found, starting empty", self._db_file)
                self._store = {}
                self._last_id = 0
                self._loaded = True
                return 0
            try:
                raw = json.loads(self._db_file.read_text(encoding="utf-8") or "[]")
            except OSError as exc:
                raise ContactStoreError(f"error reading contacts db: {exc}") from exc
            except ValueError as exc:
                # JSONDecodeError and UnicodeDecodeError
                raise ContactStoreError(f"error parsing contacts db: {exc}") from exc
            if not isinstance(raw, list):
                raise ContactStoreError(
                    f"error parsing contacts db: expected a JSON array, got {type(raw).__name__}"
                )
            try:
                contacts = [Contact.model_validate(item) for item in raw]
            except ValidationError as exc:
                raise ContactStoreError(f"error parsing contacts db: {exc}") from exc

            self._store = {c.id: c for c in contacts}
            self._last_id = max(self._store, default=0)
            self._loaded = True
            logger.info("Loaded %d contacts from %s", len(self._store), self._db_file)
            return len(self._store)

    def _write(self) -> None:
        payload = json.dumps(
            [self._store[cid].model_dump() for cid in sorted(self._store)],
            indent=2,
        )
        directory = self._db_file.parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._db_file.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self._db_file)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise ContactStoreError(f"error writing contacts db: {exc}") from exc
