"""Shared pytest fixtures. Environment must be set before the app is imported."""

import os

os.environ.setdefault("CONTACTS_SESSION_KEY", "test-session-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from contacts_app.repositories.contact_repository import ContactRepository  # noqa: E402
from contacts_app.services.contact_service import ContactService  # noqa: E402


@pytest.fixture
def db_file(tmp_path):
    return tmp_path / "contacts.json"


@pytest.fixture
def repo(db_file):
    contact_repo = ContactRepository(db_file)
    contact_repo.load()
    return contact_repo


@pytest.fixture
def service(repo):
    return ContactService(contact_repo=repo, page_size=100)
