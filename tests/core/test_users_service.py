import pytest

from packages.core.storage.sqlite import SQLiteStore
from packages.core.users.service import create_user, delete_user, set_partner, update_user


def test_create_user_strips_blank_email(tmp_path):
    store = SQLiteStore(db_path=str(tmp_path / "personalweb.db"))
    user = create_user(store, name=" Alice ", email="   ")
    assert user.name == "Alice"
    assert user.email is None
    assert store.get_user(user.id) == user


def test_update_user_keeps_unset_fields(tmp_path):
    store = SQLiteStore(db_path=str(tmp_path / "personalweb.db"))
    user = create_user(store, name="Alice", email="alice@example.com")
    updated = update_user(store, user, email="new@example.com")
    assert updated.name == "Alice"
    assert store.get_user(user.id).email == "new@example.com"


def test_set_partner_validation(tmp_path):
    store = SQLiteStore(db_path=str(tmp_path / "personalweb.db"))
    alice = create_user(store, name="Alice")
    with pytest.raises(ValueError):
        set_partner(store, alice, alice.id)
    with pytest.raises(ValueError):
        set_partner(store, alice, "missing")

    bob = create_user(store, name="Bob")
    linked = set_partner(store, alice, bob.id)
    assert store.get_user(alice.id).partner_id == bob.id

    unlinked = set_partner(store, linked, "")
    assert unlinked.partner_id is None


def test_delete_user(tmp_path):
    store = SQLiteStore(db_path=str(tmp_path / "personalweb.db"))
    alice = create_user(store, name="Alice")
    delete_user(store, alice)
    assert store.list_users() == []
