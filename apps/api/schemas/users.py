from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class UserCreateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class UserUpdateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    partner_id: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    name: Optional[str]
    email: Optional[str]
    partner_id: Optional[str]
    created_at: str
    updated_at: str
