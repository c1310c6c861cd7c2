from fastapi.testclient import TestClient

from apps.api.main import app
from apps.api.routes import todos as todos_module
from packages.core.storage.sqlite import SQLiteStore
from packages.core.todos.service import DEFAULT_ICON
from packages.core.users.service import create_user, set_partner


def _setup(monkeypatch, tmp_path):
    store = SQLiteStore(db_path=str(tmp_path / "personalweb.db"))
    monkeypatch.setattr(todos_module, "_store", lambda: store)
    return store, TestClient(app)


def test_todo_list_and_items(monkeypatch, tmp_path):
    store, client = _setup(monkeypatch, tmp_path)
    alice = create_user(store, name="Alice")
    headers = {"X-User-Id": alice.id}

    create_resp = client.post("/todos", headers=headers, json={"title": "Groceries"})
    assert create_resp.status_code == 200
    todo_list = create_resp.json()
    assert todo_list["icon"] == DEFAULT_ICON
    assert todo_list["items"] == []
    list_id = todo_list["id"]

    client.post(f"/todos/{list_id}/todo", headers=headers, json={"text": "Milk"})
    add_resp = client.post(f"/todos/{list_id}/todo", headers=headers, json={"text": "Eggs"})
    assert add_resp.status_code == 200
    items = add_resp.json()["items"]
    assert [item["text"] for item in items] == ["Eggs", "Milk"]

    milk_id = items[1]["id"]
    toggle_resp = client.put(
        f"/todos/{list_id}/todo/{milk_id}", headers=headers, json={"completed": True}
    )
    assert toggle_resp.status_code == 200
    milk = [item for item in toggle_resp.json()["items"] if item["id"] == milk_id][0]
    assert milk["text"] == "Milk"
    assert milk["completed"] is True

    remove_resp = client.delete(f"/todos/{list_id}/todo/{milk_id}", headers=headers)
    assert [item["text"] for item in remove_resp.json()["items"]] == ["Eggs"]

    rename_resp = client.put(f"/todos/{list_id}", headers=headers, json={"title": "Shopping", "icon": ""})
    assert rename_resp.json()["title"] == "Shopping"
    assert rename_resp.json()["icon"] == DEFAULT_ICON

    delete_resp = client.delete(f"/todos/{list_id}", headers=headers)
    assert delete_resp.json() == {"msg": "Todo list deleted"}
    assert client.get(f"/todos/{list_id}", headers=headers).status_code == 404


def test_missing_todo_item_is_404(monkeypatch, tmp_path):
    store, client = _setup(monkeypatch, tmp_path)
    alice = create_user(store, name="Alice")
    headers = {"X-User-Id": alice.id}
    list_id = client.post("/todos", headers=headers, json={"title": "Groceries"}).json()["id"]

    put_resp = client.put(f"/todos/{list_id}/todo/missing", headers=headers, json={"completed": True})
    assert put_resp.status_code == 404
    assert put_resp.json()["detail"] == "Todo not found"
    assert client.delete(f"/todos/{list_id}/todo/missing", headers=headers).status_code == 404
    assert client.post("/todos/missing/todo", headers=headers, json={"text": "Milk"}).status_code == 404


def test_blank_todo_text_is_a_validation_error(monkeypatch, tmp_path):
    store, client = _setup(monkeypatch, tmp_path)
    alice = create_user(store, name="Alice")
    headers = {"X-User-Id": alice.id}
    list_id = client.post("/todos", headers=headers, json={"title": "Groceries"}).json()["id"]

    assert client.post("/todos", headers=headers, json={"title": " "}).status_code == 422
    assert client.post(f"/todos/{list_id}/todo", headers=headers, json={"text": "\n"}).status_code == 422


def test_partner_reads_lists_but_only_owner_changes_them(monkeypatch, tmp_path):
    store, client = _setup(monkeypatch, tmp_path)
    alice = create_user(store, name="Alice")
    bob = create_user(store, name="Bob")
    carol = create_user(store, name="Carol")
    set_partner(store, bob, alice.id)
    list_id = client.post(
        "/todos", headers={"X-User-Id": alice.id}, json={"title": "Groceries"}
    ).json()["id"]
    bob_headers = {"X-User-Id": bob.id}

    assert [t["id"] for t in client.get("/todos", headers=bob_headers).json()] == [list_id]
    assert client.get(f"/todos/{list_id}", headers=bob_headers).status_code == 200

    add_resp = client.post(f"/todos/{list_id}/todo", headers=bob_headers, json={"text": "Milk"})
    assert add_resp.status_code == 401
    assert add_resp.json()["detail"] == "Not authorized to add to this todo list"

    delete_resp = client.delete(f"/todos/{list_id}", headers=bob_headers)
    assert delete_resp.status_code == 401
    assert store.get_todo_list(list_id) is not None

    carol_resp = client.get(f"/todos/{list_id}", headers={"X-User-Id": carol.id})
    assert carol_resp.status_code == 401
    assert carol_resp.json()["detail"] == "Not authorized to view this todo list"
