from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from apps.api.schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest
from apps.api.store import default_store
from packages.core.storage.sqlite import SQLiteStore
from packages.core.users.service import create_user, delete_user, set_partner, update_user


router = APIRouter(prefix="/users", tags=["users"])


def _store() -> SQLiteStore:
    return default_store()


def _to_response(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        partner_id=user.partner_id,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post("", response_model=UserResponse)
def create(payload: UserCreateRequest) -> UserResponse:
    user = create_user(_store(), name=payload.name, email=payload.email)
    return _to_response(user)


@router.get("", response_model=List[UserResponse])
def list_all() -> List[UserResponse]:
    return [_to_response(user) for user in _store().list_users()]


@router.get("/{user_id}", response_model=UserResponse)
def get(user_id: str) -> UserResponse:
    user = _store().get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return _to_response(user)


@router.patch("/{user_id}", response_model=UserResponse)
def update(user_id: str, payload: UserUpdateRequest) -> UserResponse:
    store = _store()
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    if payload.partner_id is not None:
        try:
            user = set_partner(store, user, payload.partner_id)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
    updated = update_user(store, user, name=payload.name, email=payload.email)
    return _to_response(updated)


@router.delete("/{user_id}")
def delete(user_id: str) -> Dict[str, Any]:
    store = _store()
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    delete_user(store, user)
    return {"status": "deleted", "id": user_id}
