from .dates import DateCreateRequest, DateResponse, DateUpdateRequest
from .events import EventCreateRequest, EventResponse, EventUpdateRequest
from .reminders import (
    ReminderOutcomeResponse,
    ReminderPreviewResponse,
    ReminderRunRequest,
    ReminderRunResponse,
)
from .todos import (
    TodoItemCreateRequest,
    TodoItemResponse,
    TodoItemUpdateRequest,
    TodoListCreateRequest,
    TodoListResponse,
    TodoListUpdateRequest,
)
from .users import UserCreateRequest, UserResponse, UserUpdateRequest

__all__ = [
    "DateCreateRequest",
    "DateResponse",
    "DateUpdateRequest",
    "EventCreateRequest",
    "EventResponse",
    "EventUpdateRequest",
    "ReminderOutcomeResponse",
    "ReminderPreviewResponse",
    "ReminderRunRequest",
    "ReminderRunResponse",
    "TodoItemCreateRequest",
    "TodoItemResponse",
    "TodoItemUpdateRequest",
    "TodoListCreateRequest",
    "TodoListResponse",
    "TodoListUpdateRequest",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
