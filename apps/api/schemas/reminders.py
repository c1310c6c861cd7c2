from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel


class ReminderRunRequest(BaseModel):
    date: Optional[dt.date] = None


class ReminderOutcomeResponse(BaseModel):
    status: str
    user_id: str
    record_id: str
    reason: Optional[str]
    days_until: Optional[int]
    occurrence: Optional[str]
    message_id: Optional[str]


class ReminderRunResponse(BaseModel):
    today: str
    users_checked: int
    users_without_email: int
    sent: int
    skipped: int
    failed: int
    outcomes: List[ReminderOutcomeResponse]


class ReminderPreviewResponse(BaseModel):
    to_email: str
    subject: str
    html: str
    text: str
    occurrence: str
