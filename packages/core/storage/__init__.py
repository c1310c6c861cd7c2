from .base import (
    AppStore,
    DatedRecordState,
    DatedRecordStore,
    EventState,
    EventStore,
    TodoItemState,
    TodoListState,
    TodoStore,
    UserState,
    UserStore,
)
from .sqlite import SQLiteStore

__all__ = [
    "AppStore",
    "DatedRecordState",
    "DatedRecordStore",
    "EventState",
    "EventStore",
    "TodoItemState",
    "TodoListState",
    "TodoStore",
    "UserState",
    "UserStore",
    "SQLiteStore",
]
