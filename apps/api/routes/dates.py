from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Header, HTTPException

from apps.api.acting_user import acting_user
from apps.api.schemas.dates import DateCreateRequest, DateResponse, DateUpdateRequest
from apps.api.store import default_store
from packages.core.dates.recurrence import local_today, next_occurrence, parse_iso_date
from packages.core.dates.service import (
    can_view,
    create_dated_record,
    delete_dated_record,
    list_visible_records,
    update_dated_record,
)
from packages.core.storage.sqlite import SQLiteStore


router = APIRouter(prefix="/dates", tags=["dates"])


def _store() -> SQLiteStore:
    return default_store()


def _next_occurrence(record) -> Optional[str]:
    try:
        occurs_on = parse_iso_date(record.occurs_on)
    except ValueError:
        return None
    today = local_today(os.getenv("REMINDERS_TIMEZONE") or None)
    return next_occurrence(occurs_on, record.recurring, today).isoformat()


def _to_response(record) -> DateResponse:
    return DateResponse(
        id=record.id,
        owner_id=record.owner_id,
        title=record.title,
        date=record.occurs_on,
        category=record.category,
        recurring=record.recurring,
        notes=record.notes,
        next_occurrence=_next_occurrence(record),
        last_reminded_on=record.last_reminded_on,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.get("", response_model=List[DateResponse])
def list_all(x_user_id: Optional[str] = Header(default=None)) -> List[DateResponse]:
    store = _store()
    user = acting_user(store, x_user_id)
    return [_to_response(record) for record in list_visible_records(store, user)]


@router.post("", response_model=DateResponse)
def create(
    payload: DateCreateRequest, x_user_id: Optional[str] = Header(default=None)
) -> DateResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    try:
        record = create_dated_record(
            store,
            owner_id=user.id,
            title=payload.title,
            occurs_on=payload.date,
            category=payload.category,
            recurring=payload.recurring,
            notes=payload.notes,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _to_response(record)


@router.get("/{record_id}", response_model=DateResponse)
def get(record_id: str, x_user_id: Optional[str] = Header(default=None)) -> DateResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    record = store.get_dated_record(record_id)
    if record is None or not can_view(user, record):
        raise HTTPException(status_code=404, detail="Date not found")
    return _to_response(record)


@router.put("/{record_id}", response_model=DateResponse)
def update(
    record_id: str,
    payload: DateUpdateRequest,
    x_user_id: Optional[str] = Header(default=None),
) -> DateResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    record = store.get_dated_record(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Date not found")
    if record.owner_id != user.id:
        raise HTTPException(status_code=401, detail="Not authorized to update this date")
    updated = update_dated_record(
        store,
        record,
        title=payload.title,
        occurs_on=payload.date,
        category=payload.category,
        recurring=payload.recurring,
        notes=payload.notes,
    )
    return _to_response(updated)


@router.delete("/{record_id}")
def delete(record_id: str, x_user_id: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    store = _store()
    user = acting_user(store, x_user_id)
    record = store.get_dated_record(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Date not found")
    if record.owner_id != user.id:
        raise HTTPException(status_code=401, detail="Not authorized to delete this date")
    delete_dated_record(store, record)
    return {"msg": "Date removed"}
