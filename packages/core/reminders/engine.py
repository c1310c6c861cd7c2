"""One pass of the daily important-date reminder check.

The run walks every user with an email address, computes the next
occurrence of each of their records and sends a reminder when it lands
today or tomorrow. Every record produces a ``ReminderOutcome``; the outcomes
are folded into a ``RunSummary`` so a bad record or a failed delivery shows
up in the result instead of ending the run.
"""

from __future__ import annotations

import datetime as dt
import logging

from ..dates.recurrence import ReminderWindow, next_occurrence, parse_iso_date
from ..storage.base import AppStore, DatedRecordState, UserState
from .message import render_date_reminder
from .models import (
    FAILED,
    SENT,
    SKIPPED,
    EmailTransport,
    ReminderOutcome,
    RunSummary,
    SendResult,
)


logger = logging.getLogger("personalweb.reminders")


def send_date_reminder(
    transport: EmailTransport,
    user: UserState,
    record: DatedRecordState,
    occurrence: dt.date,
    days_until: int,
) -> SendResult:
    if not user.email:
        logger.info("reminder_no_email user_id=%s", user.id)
        return SendResult(success=False, error="No email address")
    message = render_date_reminder(user, record, occurrence, days_until)
    try:
        return transport.send(message.to_email, message.subject, message.html, message.text)
    except Exception as exc:
        logger.exception("reminder_transport_error record_id=%s error=%s", record.id, exc)
        return SendResult(success=False, error=str(exc))


def process_record(
    store: AppStore,
    transport: EmailTransport,
    user: UserState,
    record: DatedRecordState,
    window: ReminderWindow,
) -> ReminderOutcome:
    try:
        occurs_on = parse_iso_date(record.occurs_on)
    except ValueError as exc:
        logger.error("reminder_invalid_date record_id=%s error=%s", record.id, exc)
        return ReminderOutcome(
            status=FAILED, user_id=user.id, record_id=record.id, reason="invalid_date"
        )

    occurrence = next_occurrence(occurs_on, record.recurring, window.today)
    days_until = window.days_until(occurrence)
    if days_until is None:
        return ReminderOutcome(
            status=SKIPPED,
            user_id=user.id,
            record_id=record.id,
            reason="not_due",
            occurrence=occurrence,
        )
    if record.last_reminded_on == window.today.isoformat():
        logger.info("reminder_already_sent record_id=%s", record.id)
        return ReminderOutcome(
            status=SKIPPED,
            user_id=user.id,
            record_id=record.id,
            reason="already_reminded",
            days_until=days_until,
            occurrence=occurrence,
        )

    logger.info(
        "reminder_sending when=%s title=%s to=%s",
        "today" if days_until == 0 else "tomorrow",
        record.title,
        user.email,
    )
    result = send_date_reminder(transport, user, record, occurrence, days_until)
    if not result.success:
        logger.error(
            "reminder_send_failed record_id=%s error=%s", record.id, result.error
        )
        return ReminderOutcome(
            status=FAILED,
            user_id=user.id,
            record_id=record.id,
            reason=result.error or "send_failed",
            days_until=days_until,
            occurrence=occurrence,
        )

    reason = None
    try:
        store.mark_reminded(record.id, window.today.isoformat())
    except Exception as exc:
        # The mail is out; only the duplicate guard for today is lost.
        logger.exception("reminder_mark_failed record_id=%s error=%s", record.id, exc)
        reason = "mark_failed"
    return ReminderOutcome(
        status=SENT,
        user_id=user.id,
        record_id=record.id,
        reason=reason,
        days_until=days_until,
        occurrence=occurrence,
        message_id=result.message_id,
    )


def check_upcoming_dates(
    store: AppStore, transport: EmailTransport, today: dt.date
) -> RunSummary:
    window = ReminderWindow.starting(today)
    summary = RunSummary(today=today)
    logger.info("reminders_run_started today=%s", today.isoformat())

    for user in store.list_users():
        if not user.email:
            logger.debug("reminders_user_skipped user_id=%s reason=no_email", user.id)
            summary.users_without_email += 1
            continue
        summary.users_checked += 1
        logger.info("reminders_user_check user=%s", user.name or user.email)
        for record in store.list_dated_records(user.id):
            summary.add(process_record(store, transport, user, record, window))

    counts = summary.counts()
    logger.info(
        "reminders_run_finished sent=%s skipped=%s failed=%s",
        counts[SENT],
        counts[SKIPPED],
        counts[FAILED],
    )
    return summary
