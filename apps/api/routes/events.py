from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Header, HTTPException

from apps.api.acting_user import acting_user
from apps.api.schemas.events import EventCreateRequest, EventResponse, EventUpdateRequest
from apps.api.store import default_store
from packages.core.events.service import (
    create_event,
    delete_event,
    list_visible_events,
    update_event,
)
from packages.core.storage.base import EventState
from packages.core.storage.sqlite import SQLiteStore
from packages.core.users.service import can_access


router = APIRouter(prefix="/events", tags=["events"])


def _store() -> SQLiteStore:
    return default_store()


def _to_response(event: EventState) -> EventResponse:
    return EventResponse(
        id=event.id,
        owner_id=event.owner_id,
        title=event.title,
        start_date=event.starts_at,
        end_date=event.ends_at,
        location=event.location,
        description=event.description,
        category=event.category,
        created_at=event.created_at,
        updated_at=event.updated_at,
    )


def _owned_event(store: SQLiteStore, event_id: str, user_id: str, action: str) -> EventState:
    event = store.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    if event.owner_id != user_id:
        raise HTTPException(status_code=401, detail=f"Not authorized to {action} this event")
    return event


@router.get("", response_model=List[EventResponse])
def list_all(x_user_id: Optional[str] = Header(default=None)) -> List[EventResponse]:
    store = _store()
    user = acting_user(store, x_user_id)
    return [_to_response(event) for event in list_visible_events(store, user)]


@router.post("", response_model=EventResponse)
def create(
    payload: EventCreateRequest, x_user_id: Optional[str] = Header(default=None)
) -> EventResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    try:
        event = create_event(
            store,
            owner_id=user.id,
            title=payload.title,
            starts_at=payload.start_date,
            ends_at=payload.end_date,
            location=payload.location,
            description=payload.description,
            category=payload.category,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _to_response(event)


@router.get("/{event_id}", response_model=EventResponse)
def get(event_id: str, x_user_id: Optional[str] = Header(default=None)) -> EventResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    event = store.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    if not can_access(user, event.owner_id):
        raise HTTPException(status_code=401, detail="Not authorized to view this event")
    return _to_response(event)


@router.put("/{event_id}", response_model=EventResponse)
def update(
    event_id: str,
    payload: EventUpdateRequest,
    x_user_id: Optional[str] = Header(default=None),
) -> EventResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    event = _owned_event(store, event_id, user.id, "update")
    try:
        updated = update_event(
            store,
            event,
            title=payload.title,
            starts_at=payload.start_date,
            ends_at=payload.end_date,
            location=payload.location,
            description=payload.description,
            category=payload.category,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _to_response(updated)


@router.delete("/{event_id}")
def delete(event_id: str, x_user_id: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    store = _store()
    user = acting_user(store, x_user_id)
    event = _owned_event(store, event_id, user.id, "delete")
    delete_event(store, event)
    return {"msg": "Event removed"}
