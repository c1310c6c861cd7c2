"""Calendar events: a titled span of time with an optional place."""

from __future__ import annotations

import datetime as dt
import uuid
from typing import List, Optional

from ..storage.base import EventState, EventStore, UserState
from ..users.service import visible_owner_ids
from .models import CATEGORIES, DEFAULT_CATEGORY


def _utc_now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def _as_utc(value: dt.datetime) -> dt.datetime:
    # Naive timestamps are taken to be UTC so stored values sort as text.
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def _check_span(starts_at: dt.datetime, ends_at: dt.datetime) -> None:
    if ends_at < starts_at:
        raise ValueError("End date must not be before start date")


def _check_category(category: Optional[str]) -> Optional[str]:
    if category is not None and category not in CATEGORIES:
        raise ValueError(f"Unknown category: {category}")
    return category


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def create_event(
    store: EventStore,
    owner_id: str,
    title: str,
    starts_at: dt.datetime,
    ends_at: dt.datetime,
    location: Optional[str] = None,
    description: Optional[str] = None,
    category: Optional[str] = None,
) -> EventState:
    if not title or not title.strip():
        raise ValueError("Title is required")
    starts_at, ends_at = _as_utc(starts_at), _as_utc(ends_at)
    _check_span(starts_at, ends_at)
    now = _utc_now_iso()
    event = EventState(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        title=title.strip(),
        starts_at=starts_at.isoformat(),
        ends_at=ends_at.isoformat(),
        location=_clean(location),
        description=_clean(description),
        category=_check_category(category) or DEFAULT_CATEGORY,
        created_at=now,
        updated_at=now,
    )
    store.create_event(event)
    return event


def update_event(
    store: EventStore,
    event: EventState,
    title: Optional[str] = None,
    starts_at: Optional[dt.datetime] = None,
    ends_at: Optional[dt.datetime] = None,
    location: Optional[str] = None,
    description: Optional[str] = None,
    category: Optional[str] = None,
) -> EventState:
    """Partial update; empty title, times and category keep the stored value,
    while ``location`` and ``description`` overwrite whenever passed."""
    new_start = _as_utc(starts_at) if starts_at else dt.datetime.fromisoformat(event.starts_at)
    new_end = _as_utc(ends_at) if ends_at else dt.datetime.fromisoformat(event.ends_at)
    _check_span(new_start, new_end)
    updated = EventState(
        id=event.id,
        owner_id=event.owner_id,
        title=title.strip() if title and title.strip() else event.title,
        starts_at=new_start.isoformat(),
        ends_at=new_end.isoformat(),
        location=_clean(location) if location is not None else event.location,
        description=_clean(description) if description is not None else event.description,
        category=_check_category(category) if category else event.category,
        created_at=event.created_at,
        updated_at=_utc_now_iso(),
    )
    store.update_event(updated)
    return updated


def delete_event(store: EventStore, event: EventState) -> None:
    store.delete_event(event.id)


def list_visible_events(store: EventStore, user: UserState) -> List[EventState]:
    events: List[EventState] = []
    for owner_id in visible_owner_ids(user):
        events.extend(store.list_events(owner_id))
    return sorted(events, key=lambda event: event.starts_at)
