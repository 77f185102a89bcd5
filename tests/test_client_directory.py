"""Detección de duplicados al crear y editar clientes"""

import pytest

from garden_crm.exceptions import DuplicateClientError, NotFoundError, ValidationError
from garden_crm.models import Client
from garden_crm.schemas import ClientCreate, ClientUpdate
from garden_crm.services.clients import CONTACT_MESSAGE, NAME_ADDRESS_MESSAGE, ClientDirectory


@pytest.fixture()
def directory(db, cache):
    return ClientDirectory(db, cache)


def _count(db, owner):
    return db.query(Client).filter(Client.owner_id == owner.id).count()


def test_name_and_address_match_is_case_insensitive(directory, db, owner, client_record):
    with pytest.raises(DuplicateClientError) as exc_info:
        directory.create_client(owner.id, ClientCreate(name="jane doe", address="12 ELM ST"))

    assert exc_info.value.rule == DuplicateClientError.NAME_ADDRESS
    assert exc_info.value.message == NAME_ADDRESS_MESSAGE
    assert _count(db, owner) == 1


def test_same_name_different_address_is_allowed(directory, db, owner, client_record):
    created = directory.create_client(owner.id, ClientCreate(name="Jane Doe", address="14 Elm St"))

    assert created.id != client_record.id
    assert _count(db, owner) == 2


def test_boundary_whitespace_is_trimmed_before_matching(directory, owner, client_record):
    with pytest.raises(DuplicateClientError):
        directory.create_client(owner.id, ClientCreate(name="  Jane Doe ", address=" 12 elm st  "))


def test_internal_whitespace_is_not_normalized(directory, owner, client_record):
    created = directory.create_client(owner.id, ClientCreate(name="Jane Doe", address="12  Elm St"))
    assert created.address == "12  Elm St"


def test_email_match_is_case_insensitive(directory, db, owner, client_record):
    with pytest.raises(DuplicateClientError) as exc_info:
        directory.create_client(
            owner.id,
            ClientCreate(name="John Smith", address="1 Oak Rd", email="A@X.com"),
        )

    assert exc_info.value.rule == DuplicateClientError.CONTACT
    assert exc_info.value.message == CONTACT_MESSAGE
    assert _count(db, owner) == 1


def test_phone_match_rejects(directory, owner):
    directory.create_client(owner.id, ClientCreate(name="A", address="1 Oak Rd", phone="555-0100"))

    with pytest.raises(DuplicateClientError) as exc_info:
        directory.create_client(owner.id, ClientCreate(name="B", address="2 Oak Rd", phone="555-0100"))
    assert exc_info.value.rule == DuplicateClientError.CONTACT


def test_blank_contact_fields_are_not_compared(directory, owner):
    directory.create_client(owner.id, ClientCreate(name="A", address="1 Oak Rd", email="", phone=""))
    created = directory.create_client(owner.id, ClientCreate(name="B", address="2 Oak Rd", email="  "))

    assert created.email is None
    assert created.phone is None


def test_duplicates_are_scoped_to_owner(directory, db, owner, other_owner, client_record):
    created = directory.create_client(
        other_owner.id,
        ClientCreate(name="Jane Doe", address="12 Elm St", email="a@x.com"),
    )
    assert created.owner_id == other_owner.id


def test_blank_name_is_a_field_error(directory, owner):
    with pytest.raises(ValidationError) as exc_info:
        directory.create_client(owner.id, ClientCreate(name="   ", address="1 Oak Rd"))
    assert "name" in exc_info.value.field_errors


def test_create_invalidates_cached_list(directory, owner, client_record):
    assert len(directory.list_clients(owner.id)) == 1

    directory.create_client(owner.id, ClientCreate(name="Bob", address="3 Pine Ave"))

    assert len(directory.list_clients(owner.id)) == 2


def test_update_rechecks_duplicates_excluding_itself(directory, owner, client_record):
    other = directory.create_client(owner.id, ClientCreate(name="Bob", address="3 Pine Ave"))

    # Editar el propio registro sin cambiar identidad no choca consigo mismo
    same = directory.update_client(owner.id, client_record.id, ClientUpdate(name="JANE DOE"))
    assert same.name == "JANE DOE"

    with pytest.raises(DuplicateClientError):
        directory.update_client(owner.id, other.id, ClientUpdate(name="jane doe", address="12 elm st"))

    with pytest.raises(DuplicateClientError):
        directory.update_client(owner.id, other.id, ClientUpdate(email="A@x.COM"))


def test_update_notes_only_skips_dedup(directory, owner, client_record):
    updated = directory.update_client(owner.id, client_record.id, ClientUpdate(notes="Gate code 1234", status=None))

    assert updated.notes == "Gate code 1234"
    assert updated.status == "active"


def test_delete_client(directory, db, owner, client_record):
    directory.delete_client(owner.id, client_record.id)

    assert _count(db, owner) == 0
    with pytest.raises(NotFoundError):
        directory.get_client(owner.id, client_record.id)


def test_accented_name_and_address_match_ignoring_case(directory, owner):
    directory.create_client(owner.id, ClientCreate(name="JOSÉ NÚÑEZ", address="CALLE ÁLAMO 3"))

    with pytest.raises(DuplicateClientError) as exc_info:
        directory.create_client(owner.id, ClientCreate(name="josé núñez", address="calle álamo 3"))
    assert exc_info.value.rule == DuplicateClientError.NAME_ADDRESS


def test_accented_email_match_ignoring_case(directory, owner):
    directory.create_client(owner.id, ClientCreate(name="A", address="1 Oak Rd", email="ÑANDÚ@example.com"))

    with pytest.raises(DuplicateClientError):
        directory.create_client(owner.id, ClientCreate(name="B", address="2 Oak Rd", email="ñandú@example.com"))
