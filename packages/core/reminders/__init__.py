from .engine import check_upcoming_dates, process_record, send_date_reminder
from .message import format_locale_date, render_date_reminder, reminder_subject
from .models import (
    EmailTransport,
    ReminderMessage,
    ReminderOutcome,
    RunSummary,
    SendResult,
)

__all__ = [
    "EmailTransport",
    "ReminderMessage",
    "ReminderOutcome",
    "RunSummary",
    "SendResult",
    "check_upcoming_dates",
    "format_locale_date",
    "process_record",
    "render_date_reminder",
    "reminder_subject",
    "send_date_reminder",
]
