from __future__ import annotations

import datetime as dt
import html

from ..dates.models import category_label
from ..storage.base import DatedRecordState, UserState
from .models import ReminderMessage


_DAY_TEXT = {0: "today", 1: "tomorrow"}


def format_locale_date(value: dt.date) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def single_line(value: str) -> str:
    """Collapse line breaks and runs of whitespace; mail headers reject CR/LF."""
    return " ".join(value.split())


def reminder_subject(title: str, days_until: int) -> str:
    return f"Reminder: {single_line(title)} is {_DAY_TEXT[days_until]}!"


def render_date_reminder(
    user: UserState,
    record: DatedRecordState,
    occurrence: dt.date,
    days_until: int,
) -> ReminderMessage:
    if days_until not in _DAY_TEXT:
        raise ValueError(f"days_until must be 0 or 1, got {days_until}")
    day_text = _DAY_TEXT[days_until]
    subject = reminder_subject(record.title, days_until)
    greeting_name = user.name or "there"
    label = category_label(record.category)
    date_text = format_locale_date(occurrence)

    notes_html = ""
    if record.notes:
        notes_html = f"<p><strong>Notes:</strong> {html.escape(record.notes)}</p>"

    body_html = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f'<h2 style="color: #4f46e5;">{html.escape(subject)}</h2>'
        f"<p>Hello {html.escape(greeting_name)},</p>"
        "<p>This is a friendly reminder that "
        f"<strong>{html.escape(record.title)}</strong> is {day_text}!</p>"
        '<div style="background-color: #f3f4f6; padding: 15px; border-radius: 5px; margin: 20px 0;">'
        f"<p><strong>Event:</strong> {html.escape(record.title)}</p>"
        f"<p><strong>Category:</strong> {html.escape(label)}</p>"
        f"<p><strong>Date:</strong> {date_text}</p>"
        f"{notes_html}"
        "</div>"
        "<p>Have a great day!</p>"
        "<p>- Your PersonalWeb App</p>"
        "</div>"
    )

    lines = [
        f"Hello {greeting_name},",
        "",
        f"This is a friendly reminder that {record.title} is {day_text}!",
        "",
        f"Event: {record.title}",
        f"Category: {label}",
        f"Date: {date_text}",
    ]
    if record.notes:
        lines.append(f"Notes: {record.notes}")
    lines.extend(["", "Have a great day!", "- Your PersonalWeb App"])

    return ReminderMessage(
        to_email=user.email or "",
        subject=subject,
        html=body_html,
        text="\n".join(lines),
    )
