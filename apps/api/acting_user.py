from __future__ import annotations

from typing import Optional

from fastapi import HTTPException

from packages.core.storage.base import UserState, UserStore


def acting_user(store: UserStore, user_id: Optional[str]) -> UserState:
    """Resolve the ``X-User-Id`` header set by the fronting auth layer."""
    user = store.get_user(user_id) if user_id else None
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
