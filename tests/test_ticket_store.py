import uuid

import pytest

from ticketgate.errors import NotFound, QuotaExceeded, ValidationError
from ticketgate.schemas import TicketCreate
from ticketgate.services.tickets import TicketStore, create_ticket

BASE_URL = "https://tickets.example.com"


def _payload(**overrides):
    data = {"vatin": "12345678901", "firstName": "Ana", "lastName": "Horvat"}
    data.update(overrides)
    return TicketCreate(**data)


def test_get_by_id_returns_stored_fields(db_session):
    store = TicketStore(db_session)
    issued = create_ticket(store, _payload(), BASE_URL)

    ticket = store.get_by_id(issued.ticket_id)

    assert ticket.vatin == "12345678901"
    assert ticket.first_name == "Ana"
    assert ticket.last_name == "Horvat"
    assert ticket.created_at is not None
    assert str(issued.ticket_id) in issued.ticket_url
    assert issued.ticket_url == f"{BASE_URL}/ticket/{issued.ticket_id}"


def test_get_by_id_accepts_string_ids(db_session):
    store = TicketStore(db_session)
    issued = create_ticket(store, _payload(), BASE_URL)

    assert store.get_by_id(str(issued.ticket_id)).id == issued.ticket_id


@pytest.mark.parametrize("ticket_id", [uuid.uuid4(), "not-a-uuid"])
def test_get_by_id_unknown(db_session, ticket_id):
    with pytest.raises(NotFound):
        TicketStore(db_session).get_by_id(ticket_id)


def test_counts(db_session):
    store = TicketStore(db_session)
    create_ticket(store, _payload(), BASE_URL)
    create_ticket(store, _payload(), BASE_URL)
    create_ticket(store, _payload(vatin="10987654321"), BASE_URL)

    assert store.count_all() == 3
    assert store.count_by_vatin("12345678901") == 2
    assert store.count_by_vatin("10987654321") == 1
    assert store.count_by_vatin("00000000000") == 0


def test_names_are_stored_as_given(db_session):
    store = TicketStore(db_session)
    issued = create_ticket(store, _payload(firstName=" Ana ", lastName="Horvat "), BASE_URL)

    ticket = store.get_by_id(issued.ticket_id)
    assert (ticket.first_name, ticket.last_name) == (" Ana ", "Horvat ")


def test_empty_name_is_missing(db_session):
    store = TicketStore(db_session)

    with pytest.raises(ValidationError):
        create_ticket(store, _payload(lastName=""), BASE_URL)
    assert store.count_all() == 0


def test_custom_limit(db_session):
    store = TicketStore(db_session)
    create_ticket(store, _payload(), BASE_URL, limit=1)

    with pytest.raises(QuotaExceeded) as excinfo:
        create_ticket(store, _payload(), BASE_URL, limit=1)

    assert excinfo.value.message == "Maximum of 1 tickets per person."
    assert store.count_all() == 1
