from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class UserState:
    id: str
    name: Optional[str]
    email: Optional[str]
    partner_id: Optional[str]
    created_at: str
    updated_at: str


@runtime_checkable
class UserStore(Protocol):
    def create_user(self, user: UserState) -> None:
        """Persist a new user."""

    def update_user(self, user: UserState) -> None:
        """Update an existing user."""

    def get_user(self, user_id: str) -> Optional[UserState]:
        """Return user by id."""

    def list_users(self) -> List[UserState]:
        """List all users in storage order."""

    def delete_user(self, user_id: str) -> None:
        """Delete a user and the records it owns."""


@dataclass(frozen=True)
class DatedRecordState:
    id: str
    owner_id: str
    title: str
    occurs_on: str
    recurring: bool
    category: Optional[str]
    notes: Optional[str]
    last_reminded_on: Optional[str]
    created_at: str
    updated_at: str


@runtime_checkable
class DatedRecordStore(Protocol):
    def create_dated_record(self, record: DatedRecordState) -> None:
        """Persist a new dated record."""

    def update_dated_record(self, record: DatedRecordState) -> None:
        """Update an existing dated record."""

    def get_dated_record(self, record_id: str) -> Optional[DatedRecordState]:
        """Return dated record by id."""

    def list_dated_records(self, owner_id: str) -> List[DatedRecordState]:
        """List records owned by a user."""

    def delete_dated_record(self, record_id: str) -> None:
        """Delete a dated record."""

    def mark_reminded(self, record_id: str, reminded_on: str) -> None:
        """Record the day a reminder was last sent for a record."""



@dataclass(frozen=True)
class EventState:
    id: str
    owner_id: str
    title: str
    starts_at: str
    ends_at: str
    location: Optional[str]
    description: Optional[str]
    category: str
    created_at: str
    updated_at: str


@runtime_checkable
class EventStore(Protocol):
    def create_event(self, event: EventState) -> None:
        """Persist a new calendar event."""

    def update_event(self, event: EventState) -> None:
        """Update an existing calendar event."""

    def get_event(self, event_id: str) -> Optional[EventState]:
        """Return event by id."""

    def list_events(self, owner_id: str) -> List[EventState]:
        """List events owned by a user, earliest start first."""

    def delete_event(self, event_id: str) -> None:
        """Delete a calendar event."""


@dataclass(frozen=True)
class TodoItemState:
    id: str
    list_id: str
    text: str
    completed: bool
    created_at: str


@dataclass(frozen=True)
class TodoListState:
    id: str
    owner_id: str
    title: str
    icon: str
    items: List[TodoItemState]
    created_at: str
    updated_at: str


@runtime_checkable
class TodoStore(Protocol):
    def create_todo_list(self, todo_list: TodoListState) -> None:
        """Persist a new, empty to-do list."""

    def update_todo_list(self, todo_list: TodoListState) -> None:
        """Update list title and icon."""

    def get_todo_list(self, list_id: str) -> Optional[TodoListState]:
        """Return a list with its items, newest item first."""

    def list_todo_lists(self, owner_id: str) -> List[TodoListState]:
        """List a user's to-do lists with their items."""

    def delete_todo_list(self, list_id: str) -> None:
        """Delete a list and its items."""

    def add_todo_item(self, item: TodoItemState) -> None:
        """Add an item to an existing list."""

    def update_todo_item(self, item: TodoItemState) -> None:
        """Update item text and completion."""

    def delete_todo_item(self, item_id: str) -> None:
        """Remove an item."""


@runtime_checkable
class AppStore(UserStore, DatedRecordStore, EventStore, TodoStore, Protocol):
    """Store holding users and everything they own."""
