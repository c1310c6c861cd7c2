from fastapi.testclient import TestClient

from apps.api.main import app
from apps.api.routes import dates as dates_module
from packages.core.storage.sqlite import SQLiteStore
from packages.core.users.service import create_user, set_partner


def _setup(monkeypatch, tmp_path):
    store = SQLiteStore(db_path=str(tmp_path / "personalweb.db"))
    monkeypatch.setattr(dates_module, "_store", lambda: store)
    return store, TestClient(app)


def test_dates_crud(monkeypatch, tmp_path):
    store, client = _setup(monkeypatch, tmp_path)
    alice = create_user(store, name="Alice", email="alice@example.com")
    headers = {"X-User-Id": alice.id}

    create_resp = client.post(
        "/dates",
        headers=headers,
        json={
            "title": "Mom's birthday",
            "date": "1960-05-02",
            "category": "birthday",
            "recurring": True,
            "notes": "Call her",
        },
    )
    assert create_resp.status_code == 200
    record = create_resp.json()
    assert record["owner_id"] == alice.id
    assert record["date"] == "1960-05-02"
    assert record["next_occurrence"].endswith("-05-02")

    list_resp = client.get("/dates", headers=headers)
    assert [item["id"] for item in list_resp.json()] == [record["id"]]

    get_resp = client.get(f"/dates/{record['id']}", headers=headers)
    assert get_resp.status_code == 200

    update_resp = client.put(
        f"/dates/{record['id']}",
        headers=headers,
        json={"title": "", "recurring": False, "notes": "Send flowers"},
    )
    assert update_resp.status_code == 200
    updated = update_resp.json()
    assert updated["title"] == "Mom's birthday"
    assert updated["recurring"] is False
    assert updated["notes"] == "Send flowers"
    assert updated["next_occurrence"] == "1960-05-02"

    delete_resp = client.delete(f"/dates/{record['id']}", headers=headers)
    assert delete_resp.status_code == 200
    assert delete_resp.json() == {"msg": "Date removed"}
    assert client.get(f"/dates/{record['id']}", headers=headers).status_code == 404


def test_dates_require_known_user(monkeypatch, tmp_path):
    _, client = _setup(monkeypatch, tmp_path)
    assert client.get("/dates").status_code == 401
    assert client.get("/dates", headers={"X-User-Id": "ghost"}).status_code == 401


def test_dates_validation(monkeypatch, tmp_path):
    store, client = _setup(monkeypatch, tmp_path)
    alice = create_user(store, name="Alice", email="alice@example.com")
    headers = {"X-User-Id": alice.id}

    assert client.post("/dates", headers=headers, json={"title": "", "date": "2024-01-01"}).status_code == 422
    assert client.post("/dates", headers=headers, json={"title": "No date"}).status_code == 422
    assert (
        client.post(
            "/dates",
            headers=headers,
            json={"title": "Gym", "date": "2024-01-01", "category": "chores"},
        ).status_code
        == 422
    )


def test_partner_can_read_but_not_modify(monkeypatch, tmp_path):
    store, client = _setup(monkeypatch, tmp_path)
    alice = create_user(store, name="Alice", email="alice@example.com")
    bob = create_user(store, name="Bob", email="bob@example.com")
    set_partner(store, bob, alice.id)

    record = client.post(
        "/dates",
        headers={"X-User-Id": alice.id},
        json={"title": "Anniversary", "date": "2015-06-20", "category": "anniversary", "recurring": True},
    ).json()

    bob_headers = {"X-User-Id": bob.id}
    assert [item["id"] for item in client.get("/dates", headers=bob_headers).json()] == [record["id"]]
    assert client.get(f"/dates/{record['id']}", headers=bob_headers).status_code == 200

    update_resp = client.put(f"/dates/{record['id']}", headers=bob_headers, json={"title": "Mine"})
    assert update_resp.status_code == 401
    assert update_resp.json()["detail"] == "Not authorized to update this date"

    delete_resp = client.delete(f"/dates/{record['id']}", headers=bob_headers)
    assert delete_resp.status_code == 401
    assert store.get_dated_record(record["id"]) is not None


def test_whitespace_title_is_a_validation_error(monkeypatch, tmp_path):
    store, client = _setup(monkeypatch, tmp_path)
    alice = create_user(store, name="Alice", email="alice@example.com")

    response = client.post(
        "/dates",
        headers={"X-User-Id": alice.id},
        json={"title": "   ", "date": "2024-01-01"},
    )

    assert response.status_code == 422
    assert client.get("/dates", headers={"X-User-Id": alice.id}).json() == []
