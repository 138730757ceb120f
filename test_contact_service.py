# type: ignore
"""
Tests for ContactService: validation, save/delete/find, search and
pagination ordering.
"""

import json
from unittest.mock import patch

import pytest

from contacts_app.core.errors import ContactNotFoundError, ContactStoreError, PageNotFoundError
from contacts_app.models.domain import Contact
from contacts_app.repositories.contact_repository import ContactRepository
from contacts_app.services.contact_service import ContactService


def _contact(n, **overrides):
    data = {
        "first": f"First{n}",
        "last": f"Last{n}",
        "phone": f"555-{n:04d}",
        "email": f"user{n}@example.com",
    }
    data.update(overrides)
    return Contact(**data)


def _seed(service, count):
    for n in range(1, count + 1):
        assert service.save(_contact(n))


class TestValidation:
    def test_empty_email_fails_and_store_untouched(self, service, db_file):
        contact = _contact(1, email="")
        assert service.save(contact) is False
        assert contact.errors == {"email": "Email is required"}
        assert contact.id == 0
        assert service.count() == 0
        assert not db_file.exists()

    def test_duplicate_email_fails(self, service):
        assert service.save(_contact(1, email="dup@example.com"))
        second = _contact(2, email="dup@example.com")
        assert service.save(second) is False
        assert second.errors["email"] == "Email must be unique"
        assert service.count() == 1

    def test_update_keeps_own_email(self, service):
        contact = _contact(1)
        service.save(contact)
        stored = service.find(contact.id)
        stored.phone = "999"
        assert service.save(stored)
        assert service.find(contact.id).phone == "999"

    def test_update_to_someone_elses_email_fails(self, service):
        _seed(service, 2)
        first = service.find(1)
        first.email = "user2@example.com"
        assert service.save(first) is False
        assert service.find(1).email == "user1@example.com"

    def test_validate_clears_previous_errors(self, service):
        contact = _contact(1)
        contact.errors["email"] = "stale"
        assert service.validate(contact)
        assert contact.errors == {}


class TestSaveAndDelete:
    def test_save_allocates_id_and_persists(self, service, db_file):
        contact = _contact(1)
        assert service.save(contact)
        assert contact.id == 1
        assert json.loads(db_file.read_text())[0]["email"] == "user1@example.com"

    def test_ids_are_never_reused(self, service):
        _seed(service, 3)
        service.delete(3)
        new = _contact(4)
        service.save(new)
        assert new.id == 4

    def test_store_error_propagates_and_leaves_store_unchanged(self, service):
        _seed(service, 1)
        with patch.object(
            ContactRepository, "_write", side_effect=ContactStoreError("disk full")
        ):
            with pytest.raises(ContactStoreError):
                service.save(_contact(2))
        assert service.count() == 1

    def test_delete_missing_raises_and_file_unchanged(self, service, db_file):
        _seed(service, 2)
        before = db_file.read_text()
        with pytest.raises(ContactNotFoundError, match="contact with id 99 not found"):
            service.delete(99)
        assert db_file.read_text() == before

    def test_delete_removes(self, service):
        _seed(service, 2)
        removed = service.delete(1)
        assert removed.email == "user1@example.com"
        with pytest.raises(ContactNotFoundError):
            service.find(1)


class TestQueries:
    def test_find_returns_contact_with_empty_errors(self, service):
        _seed(service, 1)
        contact = service.find(1)
        assert contact.first == "First1"
        assert contact.errors == {}

    def test_find_missing_raises(self, service):
        with pytest.raises(ContactNotFoundError):
            service.find(5)

    def test_search_matches_any_field(self, service):
        service.save(Contact(first="Alice", last="Smith", phone="555-1234", email="alice@a.io"))
        service.save(Contact(first="Bob", last="Alison", phone="555-9999", email="bob@b.io"))
        service.save(Contact(first="Carl", last="Jones", phone="123", email="carl@c.io"))
        assert [c.first for c in service.search("Ali")] == ["Alice", "Bob"]
        assert [c.first for c in service.search("9999")] == ["Bob"]
        assert [c.first for c in service.search("@c.io")] == ["Carl"]

    def test_search_is_case_sensitive(self, service):
        service.save(Contact(first="Alice", last="Smith", phone="1", email="alice@a.io"))
        assert service.search("smith") == []
        assert len(service.search("Smith")) == 1

    def test_search_no_match(self, service):
        _seed(service, 3)
        assert service.search("zzz") == []


class TestPagination:
    def test_page_two_of_150(self, service):
        _seed(service, 150)
        page = service.page(2)
        assert [c.id for c in page] == list(range(101, 151))

    def test_page_one_is_first_hundred_by_id(self, service):
        _seed(service, 150)
        assert [c.id for c in service.page(1)] == list(range(1, 101))

    def test_page_past_end_raises(self, service):
        _seed(service, 150)
        with pytest.raises(PageNotFoundError, match="page 3 not found"):
            service.page(3)

    def test_page_one_of_empty_store(self, service):
        assert service.page(1) == []

    def test_page_below_one_raises_value_error(self, service):
        with pytest.raises(ValueError):
            service.page(0)

    def test_custom_page_size(self, repo):
        small = ContactService(contact_repo=repo, page_size=2)
        _seed(small, 5)
        assert [c.id for c in small.page(3)] == [5]
        assert small.page_size == 2


class TestRoundTrip:
    def test_reload_yields_same_contacts(self, service, db_file):
        _seed(service, 25)
        service.delete(10)
        expected = {(c.id, c.first, c.last, c.phone, c.email) for c in service.search("")}

        reloaded = ContactService(contact_repo=ContactRepository(db_file))
        assert reloaded.load() == 24
        actual = {(c.id, c.first, c.last, c.phone, c.email) for c in reloaded.search("")}
        assert actual == expected
