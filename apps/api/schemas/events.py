from __future__ import annotations

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, constr


Title = constr(strip_whitespace=True, min_length=1)

Category = Literal["personal", "work", "health", "entertainment", "chores", "other"]


class EventCreateRequest(BaseModel):
    title: Title
    start_date: dt.datetime
    end_date: dt.datetime
    location: Optional[str] = None
    description: Optional[str] = None
    category: Optional[Category] = None


class EventUpdateRequest(BaseModel):
    title: Optional[str] = None
    start_date: Optional[dt.datetime] = None
    end_date: Optional[dt.datetime] = None
    location: Optional[str] = None
    description: Optional[str] = None
    category: Optional[Category] = None


class EventResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    start_date: str
    end_date: str
    location: Optional[str]
    description: Optional[str]
    category: str
    created_at: str
    updated_at: str
