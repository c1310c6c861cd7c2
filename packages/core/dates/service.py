from __future__ import annotations

import datetime as dt
import uuid
from typing import List, Optional

from ..storage.base import DatedRecordState, DatedRecordStore, UserState
from ..users.service import can_access, visible_owner_ids
from .models import CATEGORIES, DEFAULT_CATEGORY


def _utc_now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def _check_category(category: Optional[str]) -> Optional[str]:
    if category is not None and category not in CATEGORIES:
        raise ValueError(f"Unknown category: {category}")
    return category


def create_dated_record(
    store: DatedRecordStore,
    owner_id: str,
    title: str,
    occurs_on: dt.date,
    category: Optional[str] = None,
    recurring: bool = False,
    notes: Optional[str] = None,
) -> DatedRecordState:
    if not title or not title.strip():
        raise ValueError("Title is required")
    now = _utc_now_iso()
    record = DatedRecordState(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        title=title.strip(),
        occurs_on=occurs_on.isoformat(),
        recurring=bool(recurring),
        category=_check_category(category) or DEFAULT_CATEGORY,
        notes=notes.strip() if notes else None,
        last_reminded_on=None,
        created_at=now,
        updated_at=now,
    )
    store.create_dated_record(record)
    return record


def update_dated_record(
    store: DatedRecordStore,
    record: DatedRecordState,
    title: Optional[str] = None,
    occurs_on: Optional[dt.date] = None,
    category: Optional[str] = None,
    recurring: Optional[bool] = None,
    notes: Optional[str] = None,
) -> DatedRecordState:
    """Apply a partial update.

    Empty title, date and category keep the stored value; ``recurring`` and
    ``notes`` overwrite whenever they are passed (an empty ``notes`` clears).
    Moving the date resets the reminder marker.
    """
    new_occurs_on = occurs_on.isoformat() if occurs_on else record.occurs_on
    updated = DatedRecordState(
        id=record.id,
        owner_id=record.owner_id,
        title=title.strip() if title and title.strip() else record.title,
        occurs_on=new_occurs_on,
        recurring=recurring if recurring is not None else record.recurring,
        category=_check_category(category) if category else record.category,
        notes=(notes.strip() or None) if notes is not None else record.notes,
        last_reminded_on=(
            record.last_reminded_on if new_occurs_on == record.occurs_on else None
        ),
        created_at=record.created_at,
        updated_at=_utc_now_iso(),
    )
    store.update_dated_record(updated)
    return updated


def delete_dated_record(store: DatedRecordStore, record: DatedRecordState) -> None:
    store.delete_dated_record(record.id)


def list_visible_records(
    store: DatedRecordStore, user: UserState
) -> List[DatedRecordState]:
    """Records a user can see: their own followed by their partner's."""
    records: List[DatedRecordState] = []
    for owner_id in visible_owner_ids(user):
        records.extend(store.list_dated_records(owner_id))
    return records


def can_view(user: UserState, record: DatedRecordState) -> bool:
    return can_access(user, record.owner_id)
