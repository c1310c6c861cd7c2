from __future__ import annotations

import datetime as dt
import os
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Query

from apps.api.acting_user import acting_user
from apps.api.notifications import default_transport
from apps.api.schemas.reminders import (
    ReminderOutcomeResponse,
    ReminderPreviewResponse,
    ReminderRunRequest,
    ReminderRunResponse,
)
from apps.api.store import default_store
from packages.core.dates.recurrence import local_today, next_occurrence, parse_iso_date
from packages.core.dates.service import can_view
from packages.core.reminders.engine import check_upcoming_dates
from packages.core.reminders.message import render_date_reminder
from packages.core.reminders.models import EmailTransport, RunSummary
from packages.core.storage.sqlite import SQLiteStore


router = APIRouter(prefix="/reminders", tags=["reminders"])


def _store() -> SQLiteStore:
    return default_store()


def _transport() -> EmailTransport:
    return default_transport()


def _today() -> dt.date:
    return local_today(os.getenv("REMINDERS_TIMEZONE") or None)


def _to_response(summary: RunSummary) -> ReminderRunResponse:
    counts = summary.counts()
    return ReminderRunResponse(
        today=summary.today.isoformat(),
        users_checked=summary.users_checked,
        users_without_email=summary.users_without_email,
        sent=counts["sent"],
        skipped=counts["skipped"],
        failed=counts["failed"],
        outcomes=[
            ReminderOutcomeResponse(
                status=outcome.status,
                user_id=outcome.user_id,
                record_id=outcome.record_id,
                reason=outcome.reason,
                days_until=outcome.days_until,
                occurrence=outcome.occurrence.isoformat() if outcome.occurrence else None,
                message_id=outcome.message_id,
            )
            for outcome in summary.outcomes
        ],
    )


@router.post("/run", response_model=ReminderRunResponse)
def run(payload: Optional[ReminderRunRequest] = None) -> ReminderRunResponse:
    today = payload.date if payload and payload.date else _today()
    summary = check_upcoming_dates(_store(), _transport(), today)
    return _to_response(summary)


@router.get("/preview/{record_id}", response_model=ReminderPreviewResponse)
def preview(
    record_id: str,
    days_until: int = Query(default=0, ge=0, le=1),
    x_user_id: Optional[str] = Header(default=None),
) -> ReminderPreviewResponse:
    store = _store()
    user = acting_user(store, x_user_id)
    record = store.get_dated_record(record_id)
    if record is None or not can_view(user, record):
        raise HTTPException(status_code=404, detail="Date not found")
    owner = store.get_user(record.owner_id)
    if owner is None:
        raise HTTPException(status_code=404, detail="User not found")
    try:
        occurs_on = parse_iso_date(record.occurs_on)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    occurrence = next_occurrence(occurs_on, record.recurring, _today())
    message = render_date_reminder(owner, record, occurrence, days_until)
    return ReminderPreviewResponse(
        to_email=message.to_email,
        subject=message.subject,
        html=message.html,
        text=message.text,
        occurrence=occurrence.isoformat(),
    )
