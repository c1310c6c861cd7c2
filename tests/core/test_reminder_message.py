import datetime as dt

import pytest

from packages.core.dates.models import category_label
from packages.core.reminders.message import format_locale_date, render_date_reminder
from packages.core.storage.base import DatedRecordState, UserState


def _user(name="Alice") -> UserState:
    return UserState(
        id="u1",
        name=name,
        email="alice@example.com",
        partner_id=None,
        created_at="2024-01-01T00:00:00+00:00",
        updated_at="2024-01-01T00:00:00+00:00",
    )


def _record(category="birthday", notes=None, title="Mom's birthday") -> DatedRecordState:
    return DatedRecordState(
        id="r1",
        owner_id="u1",
        title=title,
        occurs_on="1960-03-15",
        recurring=True,
        category=category,
        notes=notes,
        last_reminded_on=None,
        created_at="2024-01-01T00:00:00+00:00",
        updated_at="2024-01-01T00:00:00+00:00",
    )


@pytest.mark.parametrize(
    "category,label",
    [
        ("birthday", "Birthday"),
        ("anniversary", "Anniversary"),
        ("bill", "Bill Payment"),
        ("event", "Special Event"),
        ("other", "Other"),
        ("chores", "Event"),
        (None, "Event"),
    ],
)
def test_category_label(category, label):
    assert category_label(category) == label


def test_format_locale_date():
    assert format_locale_date(dt.date(2024, 3, 5)) == "3/5/2024"


def test_render_today_reminder():
    message = render_date_reminder(_user(), _record(), dt.date(2024, 3, 15), 0)

    assert message.to_email == "alice@example.com"
    assert message.subject == "Reminder: Mom's birthday is today!"
    assert "Hello Alice," in message.html
    assert "<strong>Category:</strong> Birthday" in message.html
    assert "<strong>Date:</strong> 3/15/2024" in message.html
    assert "Notes:" not in message.html
    assert "Date: 3/15/2024" in message.text


def test_render_tomorrow_reminder_with_notes_and_default_greeting():
    message = render_date_reminder(
        _user(name=None),
        _record(category=None, notes="Bring <cake>"),
        dt.date(2024, 3, 16),
        1,
    )

    assert message.subject == "Reminder: Mom's birthday is tomorrow!"
    assert "Hello there," in message.html
    assert "<strong>Category:</strong> Event" in message.html
    assert "<strong>Notes:</strong> Bring &lt;cake&gt;" in message.html
    assert "Notes: Bring <cake>" in message.text


def test_render_escapes_title():
    message = render_date_reminder(_user(), _record(title="<b>Party</b>"), dt.date(2024, 3, 15), 0)
    assert "<b>Party</b>" not in message.html
    assert "&lt;b&gt;Party&lt;/b&gt;" in message.html


def test_render_rejects_out_of_window_days():
    with pytest.raises(ValueError):
        render_date_reminder(_user(), _record(), dt.date(2024, 3, 17), 2)


def test_subject_collapses_line_breaks():
    message = render_date_reminder(_user(), _record(title="Dinner\nParty"), dt.date(2024, 3, 15), 0)
    assert message.subject == "Reminder: Dinner Party is today!"
    assert "\n" not in message.subject
