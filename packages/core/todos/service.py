from __future__ import annotations

import datetime as dt
import uuid
from typing import List, Optional

from ..storage.base import TodoItemState, TodoListState, TodoStore, UserState
from ..users.service import visible_owner_ids


DEFAULT_ICON = "\U0001F4DD"


def _utc_now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def _require_text(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise ValueError(message)
    return value.strip()


def create_todo_list(
    store: TodoStore, owner_id: str, title: str, icon: Optional[str] = None
) -> TodoListState:
    now = _utc_now_iso()
    todo_list = TodoListState(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        title=_require_text(title, "Title is required"),
        icon=icon.strip() if icon and icon.strip() else DEFAULT_ICON,
        items=[],
        created_at=now,
        updated_at=now,
    )
    store.create_todo_list(todo_list)
    return todo_list


def update_todo_list(
    store: TodoStore,
    todo_list: TodoListState,
    title: Optional[str] = None,
    icon: Optional[str] = None,
) -> TodoListState:
    updated = TodoListState(
        id=todo_list.id,
        owner_id=todo_list.owner_id,
        title=title.strip() if title and title.strip() else todo_list.title,
        icon=icon.strip() if icon and icon.strip() else todo_list.icon,
        items=todo_list.items,
        created_at=todo_list.created_at,
        updated_at=_utc_now_iso(),
    )
    store.update_todo_list(updated)
    return updated


def delete_todo_list(store: TodoStore, todo_list: TodoListState) -> None:
    store.delete_todo_list(todo_list.id)


def find_item(todo_list: TodoListState, item_id: str) -> Optional[TodoItemState]:
    for item in todo_list.items:
        if item.id == item_id:
            return item
    return None


def _reload(store: TodoStore, todo_list: TodoListState) -> TodoListState:
    refreshed = store.get_todo_list(todo_list.id)
    if refreshed is None:
        raise ValueError(f"Todo list '{todo_list.id}' does not exist.")
    return refreshed


def add_todo_item(store: TodoStore, todo_list: TodoListState, text: str) -> TodoListState:
    """Add an open item; the list comes back with the new item first."""
    item = TodoItemState(
        id=str(uuid.uuid4()),
        list_id=todo_list.id,
        text=_require_text(text, "Todo text is required"),
        completed=False,
        created_at=_utc_now_iso(),
    )
    store.add_todo_item(item)
    return _reload(store, todo_list)


def update_todo_item(
    store: TodoStore,
    todo_list: TodoListState,
    item: TodoItemState,
    text: Optional[str] = None,
    completed: Optional[bool] = None,
) -> TodoListState:
    updated = TodoItemState(
        id=item.id,
        list_id=item.list_id,
        text=text.strip() if text and text.strip() else item.text,
        completed=completed if completed is not None else item.completed,
        created_at=item.created_at,
    )
    store.update_todo_item(updated)
    return _reload(store, todo_list)


def delete_todo_item(
    store: TodoStore, todo_list: TodoListState, item: TodoItemState
) -> TodoListState:
    store.delete_todo_item(item.id)
    return _reload(store, todo_list)


def list_visible_todo_lists(store: TodoStore, user: UserState) -> List[TodoListState]:
    todo_lists: List[TodoListState] = []
    for owner_id in visible_owner_ids(user):
        todo_lists.extend(store.list_todo_lists(owner_id))
    return todo_lists
