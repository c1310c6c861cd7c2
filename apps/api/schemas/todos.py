from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, constr


NonBlank = constr(strip_whitespace=True, min_length=1)


class TodoListCreateRequest(BaseModel):
    title: NonBlank
    icon: Optional[str] = None


class TodoListUpdateRequest(BaseModel):
    title: Optional[str] = None
    icon: Optional[str] = None


class TodoItemCreateRequest(BaseModel):
    text: NonBlank


class TodoItemUpdateRequest(BaseModel):
    text: Optional[str] = None
    completed: Optional[bool] = None


class TodoItemResponse(BaseModel):
    id: str
    text: str
    completed: bool
    created_at: str


class TodoListResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    icon: str
    items: List[TodoItemResponse]
    created_at: str
    updated_at: str
