from __future__ import annotations

import datetime as dt
import uuid
from typing import List, Optional

from ..storage.base import UserState, UserStore


def _utc_now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def create_user(
    store: UserStore, name: Optional[str] = None, email: Optional[str] = None
) -> UserState:
    now = _utc_now_iso()
    user = UserState(
        id=str(uuid.uuid4()),
        name=_clean(name),
        email=_clean(email),
        partner_id=None,
        created_at=now,
        updated_at=now,
    )
    store.create_user(user)
    return user


def update_user(
    store: UserStore,
    user: UserState,
    name: Optional[str] = None,
    email: Optional[str] = None,
) -> UserState:
    updated = UserState(
        id=user.id,
        name=_clean(name) if name is not None else user.name,
        email=_clean(email) if email is not None else user.email,
        partner_id=user.partner_id,
        created_at=user.created_at,
        updated_at=_utc_now_iso(),
    )
    store.update_user(updated)
    return updated


def set_partner(store: UserStore, user: UserState, partner_id: Optional[str]) -> UserState:
    """Link ``user`` to another account whose dates it may read.

    An empty ``partner_id`` unlinks. Raises ``ValueError`` when the partner
    does not exist or is the user itself.
    """
    partner_id = _clean(partner_id)
    if partner_id is not None:
        if partner_id == user.id:
            raise ValueError("A user cannot be their own partner")
        if store.get_user(partner_id) is None:
            raise ValueError("Partner not found")
    updated = UserState(
        **{
            **user.__dict__,
            "partner_id": partner_id,
            "updated_at": _utc_now_iso(),
        }
    )
    store.update_user(updated)
    return updated


def delete_user(store: UserStore, user: UserState) -> None:
    store.delete_user(user.id)


def visible_owner_ids(user: UserState) -> List[str]:
    """Owners whose records ``user`` may read: itself, then its partner."""
    if user.partner_id:
        return [user.id, user.partner_id]
    return [user.id]


def can_access(user: UserState, owner_id: str) -> bool:
    return owner_id in visible_owner_ids(user)
