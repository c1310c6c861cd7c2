from __future__ import annotations

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, constr


# Whitespace-only titles are rejected at validation time.
Title = constr(strip_whitespace=True, min_length=1)

Category = Literal["birthday", "anniversary", "bill", "event", "other"]


class DateCreateRequest(BaseModel):
    title: Title
    date: dt.date
    category: Optional[Category] = None
    recurring: bool = False
    notes: Optional[str] = None


class DateUpdateRequest(BaseModel):
    title: Optional[str] = None
    date: Optional[dt.date] = None
    category: Optional[Category] = None
    recurring: Optional[bool] = None
    notes: Optional[str] = None


class DateResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    date: str
    category: Optional[str]
    recurring: bool
    notes: Optional[str]
    next_occurrence: Optional[str]
    last_reminded_on: Optional[str]
    created_at: str
    updated_at: str
