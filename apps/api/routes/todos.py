from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Header, HTTPException

from apps.api.acting_user import acting_user
from apps.api.schemas.todos import (
    TodoItemCreateRequest,
    TodoItemResponse,
    TodoItemUpdateRequest,
    TodoListCreateRequest,
    TodoListResponse,
    TodoListUpdateRequest,
)
from apps.api.store import default_store
from packages.core.storage.base import TodoItemState, TodoListState
from packages.core.storage.sqlite import SQLiteStore
from packages.core.todos.service import (
    add_todo_item,
    create_todo_list,
    delete_todo_item,
    delete_todo_list,
    find_item,
    list_visible_todo_lists,
    update_todo_item,
    update_todo_list,
)
from packages.core.users.service import can_access


router = APIRouter(prefix="/todos", tags=["todos"])


def _store() -> SQLiteStore:
    return default_store()


def _to_response(todo_list: TodoListState) -> TodoListResponse:
    return TodoListResponse(
        id=todo_list.id,
        owner_id=todo_list.owner_id,
        title=todo_list.title,
        icon=todo_list.icon,
        items=[
            TodoItemResponse(
                id=item.id,
                text=item.text,
                completed=item.completed,
                created_at=item.created_at,
            )
            for item in todo_list.items
        ],
        created_at=todo_list.created_at,
        updated_at=todo_list.updated_at,
    )


def _load_list(store: SQLiteStore, list_id: str) -> TodoListState:
    todo_list = store.get_todo_list(list_id)
    if todo_list is None:
        raise HTTPException(status_code=404, detail="Todo list not found")
    return todo_list


def _owned_list(store: SQLiteStore, list_id: str, user_id: str, action: str) -> TodoListState:
    todo_list = _load_list(store, list_id)
    if todo_list.owner_id != user_id:
        raise HTTPException(
            status_code=401, detail=f"Not authorized to {action} this todo list"
        )
    return todo_list


def _item(todo_list: TodoListState, item_id: str) -> TodoItemState:
    item = find_item(todo_list, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Todo not found")
    return item


@router.get("", response_model=List[TodoListResponse])
def list_all(x_user_id: Optional[str] = Header(default=None)) -> List[TodoListResponse]:
    store = _store()
    user = acting_user(store, x_user_id)
    return [_to_response(todo_list) for todo_list in list_visible_todo_lists(store, user)]


@router.post("", response_model=TodoListResponse)
def create(
    payload: TodoListCreateRequest, x_user_id: Optional[str] = Header(default=None)
) -> TodoListResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    todo_list = create_todo_list(store, owner_id=user.id, title=payload.title, icon=payload.icon)
    return _to_response(todo_list)


@router.get("/{list_id}", response_model=TodoListResponse)
def get(list_id: str, x_user_id: Optional[str] = Header(default=None)) -> TodoListResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    todo_list = _load_list(store, list_id)
    if not can_access(user, todo_list.owner_id):
        raise HTTPException(status_code=401, detail="Not authorized to view this todo list")
    return _to_response(todo_list)


@router.put("/{list_id}", response_model=TodoListResponse)
def update(
    list_id: str,
    payload: TodoListUpdateRequest,
    x_user_id: Optional[str] = Header(default=None),
) -> TodoListResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    todo_list = _owned_list(store, list_id, user.id, "update")
    return _to_response(update_todo_list(store, todo_list, title=payload.title, icon=payload.icon))


@router.delete("/{list_id}")
def delete(list_id: str, x_user_id: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    store = _store()
    user = acting_user(store, x_user_id)
    todo_list = _owned_list(store, list_id, user.id, "delete")
    delete_todo_list(store, todo_list)
    return {"msg": "Todo list deleted"}


@router.post("/{list_id}/todo", response_model=TodoListResponse)
def add_item(
    list_id: str,
    payload: TodoItemCreateRequest,
    x_user_id: Optional[str] = Header(default=None),
) -> TodoListResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    todo_list = _owned_list(store, list_id, user.id, "add to")
    return _to_response(add_todo_item(store, todo_list, payload.text))


@router.put("/{list_id}/todo/{item_id}", response_model=TodoListResponse)
def update_item(
    list_id: str,
    item_id: str,
    payload: TodoItemUpdateRequest,
    x_user_id: Optional[str] = Header(default=None),
) -> TodoListResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    todo_list = _owned_list(store, list_id, user.id, "update")
    item = _item(todo_list, item_id)
    updated = update_todo_item(
        store, todo_list, item, text=payload.text, completed=payload.completed
    )
    return _to_response(updated)


@router.delete("/{list_id}/todo/{item_id}", response_model=TodoListResponse)
def delete_item(
    list_id: str, item_id: str, x_user_id: Optional[str] = Header(default=None)
) -> TodoListResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    todo_list = _owned_list(store, list_id, user.id, "update")
    item = _item(todo_list, item_id)
    return _to_response(delete_todo_item(store, todo_list, item))
