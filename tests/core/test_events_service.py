import datetime as dt

import pytest

from packages.core.events.service import (
    create_event,
    delete_event,
    list_visible_events,
    update_event,
)
from packages.core.storage.sqlite import SQLiteStore
from packages.core.users.service import create_user, set_partner


def _store(tmp_path):
    return SQLiteStore(db_path=str(tmp_path / "personalweb.db"))


def test_create_event_normalizes_times_to_utc(tmp_path):
    store = _store(tmp_path)
    owner = create_user(store, name="Alice", email="alice@example.com")
    plus_two = dt.timezone(dt.timedelta(hours=2))

    event = create_event(
        store,
        owner_id=owner.id,
        title=" Dinner ",
        starts_at=dt.datetime(2024, 6, 1, 20, 0, tzinfo=plus_two),
        ends_at=dt.datetime(2024, 6, 1, 22, 0),
        location="  ",
    )

    assert event.title == "Dinner"
    assert event.starts_at == "2024-06-01T18:00:00+00:00"
    assert event.ends_at == "2024-06-01T22:00:00+00:00"
    assert event.location is None
    assert event.category == "personal"
    assert store.get_event(event.id) == event


def test_create_event_rejects_end_before_start(tmp_path):
    store = _store(tmp_path)
    owner = create_user(store, name="Alice")
    with pytest.raises(ValueError):
        create_event(
            store,
            owner_id=owner.id,
            title="Backwards",
            starts_at=dt.datetime(2024, 6, 2, 9, 0),
            ends_at=dt.datetime(2024, 6, 1, 9, 0),
        )
    assert store.list_events(owner.id) == []


def test_create_event_rejects_unknown_category(tmp_path):
    store = _store(tmp_path)
    owner = create_user(store, name="Alice")
    with pytest.raises(ValueError):
        create_event(
            store,
            owner_id=owner.id,
            title="Gym",
            starts_at=dt.datetime(2024, 6, 1, 9, 0),
            ends_at=dt.datetime(2024, 6, 1, 10, 0),
            category="sports",
        )


def test_update_event_keeps_blank_fields_and_clears_location(tmp_path):
    store = _store(tmp_path)
    owner = create_user(store, name="Alice")
    event = create_event(
        store,
        owner_id=owner.id,
        title="Dentist",
        starts_at=dt.datetime(2024, 6, 1, 9, 0),
        ends_at=dt.datetime(2024, 6, 1, 10, 0),
        location="Main St",
        category="health",
    )

    updated = update_event(
        store,
        event,
        title="",
        ends_at=dt.datetime(2024, 6, 1, 11, 0),
        location="",
    )

    assert updated.title == "Dentist"
    assert updated.starts_at == event.starts_at
    assert updated.ends_at == "2024-06-01T11:00:00+00:00"
    assert updated.location is None
    assert updated.category == "health"
    assert store.get_event(event.id).location is None


def test_update_event_rejects_end_before_stored_start(tmp_path):
    store = _store(tmp_path)
    owner = create_user(store, name="Alice")
    event = create_event(
        store,
        owner_id=owner.id,
        title="Dentist",
        starts_at=dt.datetime(2024, 6, 1, 9, 0),
        ends_at=dt.datetime(2024, 6, 1, 10, 0),
    )
    with pytest.raises(ValueError):
        update_event(store, event, ends_at=dt.datetime(2024, 6, 1, 8, 0))
    assert store.get_event(event.id).ends_at == event.ends_at


def test_list_visible_events_includes_partner_sorted_by_start(tmp_path):
    store = _store(tmp_path)
    alice = create_user(store, name="Alice")
    bob = create_user(store, name="Bob")
    carol = create_user(store, name="Carol")
    later = create_event(
        store,
        owner_id=alice.id,
        title="Later",
        starts_at=dt.datetime(2024, 7, 1, 9, 0),
        ends_at=dt.datetime(2024, 7, 1, 10, 0),
    )
    earlier = create_event(
        store,
        owner_id=bob.id,
        title="Earlier",
        starts_at=dt.datetime(2024, 6, 1, 9, 0),
        ends_at=dt.datetime(2024, 6, 1, 10, 0),
    )
    create_event(
        store,
        owner_id=carol.id,
        title="Private",
        starts_at=dt.datetime(2024, 5, 1, 9, 0),
        ends_at=dt.datetime(2024, 5, 1, 10, 0),
    )

    assert [e.id for e in list_visible_events(store, alice)] == [later.id]

    alice = set_partner(store, alice, bob.id)
    assert [e.id for e in list_visible_events(store, alice)] == [earlier.id, later.id]


def test_delete_event(tmp_path):
    store = _store(tmp_path)
    owner = create_user(store, name="Alice")
    event = create_event(
        store,
        owner_id=owner.id,
        title="Dentist",
        starts_at=dt.datetime(2024, 6, 1, 9, 0),
        ends_at=dt.datetime(2024, 6, 1, 10, 0),
    )
    delete_event(store, event)
    assert store.get_event(event.id) is None
