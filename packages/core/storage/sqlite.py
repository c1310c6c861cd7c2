from __future__ import annotations

import os
import sqlite3
from typing import List, Optional

from .base import (
    AppStore,
    DatedRecordState,
    EventState,
    TodoItemState,
    TodoListState,
    UserState,
)


_USER_COLUMNS = "id, name, email, partner_id, created_at, updated_at"
_RECORD_COLUMNS = (
    "id, owner_id, title, occurs_on, recurring, category, notes, "
    "last_reminded_on, created_at, updated_at"
)
_EVENT_COLUMNS = (
    "id, owner_id, title, starts_at, ends_at, location, description, category, "
    "created_at, updated_at"
)
_TODO_LIST_COLUMNS = "id, owner_id, title, icon, created_at, updated_at"
_TODO_ITEM_COLUMNS = "id, list_id, text, completed, created_at"


class SQLiteStore(AppStore):
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    name TEXT,
                    email TEXT,
                    partner_id TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS dated_records (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    occurs_on TEXT NOT NULL,
                    recurring INTEGER NOT NULL,
                    category TEXT,
                    notes TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY(owner_id) REFERENCES users(id)
                )
                """
            )
            self._ensure_column(conn, "dated_records", "last_reminded_on", "TEXT", "NULL")
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS dated_records_owner_idx
                ON dated_records (owner_id)
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS events (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    starts_at TEXT NOT NULL,
                    ends_at TEXT NOT NULL,
                    location TEXT,
                    description TEXT,
                    category TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY(owner_id) REFERENCES users(id)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todo_lists (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    icon TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY(owner_id) REFERENCES users(id)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todo_items (
                    id TEXT PRIMARY KEY,
                    list_id TEXT NOT NULL,
                    text TEXT NOT NULL,
                    completed INTEGER NOT NULL,
                    created_at TEXT NOT NULL,
                    FOREIGN KEY(list_id) REFERENCES todo_lists(id)
                )
                """
            )

    def _ensure_column(
        self, conn: sqlite3.Connection, table: str, column: str, column_def: str, default_sql: str
    ) -> None:
        columns = {row[1] for row in conn.execute(f"PRAGMA table_info({table})")}
        if column in columns:
            return
        conn.execute(
            f"ALTER TABLE {table} ADD COLUMN {column} {column_def} DEFAULT {default_sql}"
        )

    @staticmethod
    def _row_to_user(row: tuple) -> UserState:
        return UserState(
            id=row[0],
            name=row[1],
            email=row[2],
            partner_id=row[3],
            created_at=row[4],
            updated_at=row[5],
        )

    @staticmethod
    def _row_to_record(row: tuple) -> DatedRecordState:
        return DatedRecordState(
            id=row[0],
            owner_id=row[1],
            title=row[2],
            occurs_on=row[3],
            recurring=bool(row[4]),
            category=row[5],
            notes=row[6],
            last_reminded_on=row[7],
            created_at=row[8],
            updated_at=row[9],
        )

    def create_user(self, user: UserState) -> None:
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO users ({_USER_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    user.id,
                    user.name,
                    user.email,
                    user.partner_id,
                    user.created_at,
                    user.updated_at,
                ),
            )

    def update_user(self, user: UserState) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                UPDATE users
                SET name = ?, email = ?, partner_id = ?, updated_at = ?
                WHERE id = ?
                """,
                (user.name, user.email, user.partner_id, user.updated_at, user.id),
            )

    def get_user(self, user_id: str) -> Optional[UserState]:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    def list_users(self) -> List[UserState]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at ASC, rowid ASC"
            ).fetchall()
            return [self._row_to_user(row) for row in rows]

    def delete_user(self, user_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM dated_records WHERE owner_id = ?", (user_id,))
            conn.execute("DELETE FROM events WHERE owner_id = ?", (user_id,))
            conn.execute(
                "DELETE FROM todo_items WHERE list_id IN "
                "(SELECT id FROM todo_lists WHERE owner_id = ?)",
                (user_id,),
            )
            conn.execute("DELETE FROM todo_lists WHERE owner_id = ?", (user_id,))
            conn.execute(
                "UPDATE users SET partner_id = NULL WHERE partner_id = ?",
                (user_id,),
            )
            conn.execute("DELETE FROM users WHERE id = ?", (user_id,))

    def create_dated_record(self, record: DatedRecordState) -> None:
        with self._connect() as conn:
            conn.execute(
                f"""
                INSERT INTO dated_records ({_RECORD_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.owner_id,
                    record.title,
                    record.occurs_on,
                    1 if record.recurring else 0,
                    record.category,
                    record.notes,
                    record.last_reminded_on,
                    record.created_at,
                    record.updated_at,
                ),
            )

    def update_dated_record(self, record: DatedRecordState) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                UPDATE dated_records
                SET title = ?, occurs_on = ?, recurring = ?, category = ?, notes = ?,
                    last_reminded_on = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    record.title,
                    record.occurs_on,
                    1 if record.recurring else 0,
                    record.category,
                    record.notes,
                    record.last_reminded_on,
                    record.updated_at,
                    record.id,
                ),
            )

    def get_dated_record(self, record_id: str) -> Optional[DatedRecordState]:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_RECORD_COLUMNS} FROM dated_records WHERE id = ?",
                (record_id,),
            ).fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    def list_dated_records(self, owner_id: str) -> List[DatedRecordState]:
        with self._connect() as conn:
            rows = conn.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM dated_records
                WHERE owner_id = ?
                ORDER BY created_at ASC, rowid ASC
                """,
                (owner_id,),
            ).fetchall()
            return [self._row_to_record(row) for row in rows]

    def delete_dated_record(self, record_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM dated_records WHERE id = ?", (record_id,))

    def mark_reminded(self, record_id: str, reminded_on: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE dated_records SET last_reminded_on = ? WHERE id = ?",
                (reminded_on, record_id),
            )

    @staticmethod
    def _row_to_event(row: tuple) -> EventState:
        return EventState(
            id=row[0],
            owner_id=row[1],
            title=row[2],
            starts_at=row[3],
            ends_at=row[4],
            location=row[5],
            description=row[6],
            category=row[7],
            created_at=row[8],
            updated_at=row[9],
        )

    def create_event(self, event: EventState) -> None:
        with self._connect() as conn:
            conn.execute(
                f"""
                INSERT INTO events ({_EVENT_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event.id,
                    event.owner_id,
                    event.title,
                    event.starts_at,
                    event.ends_at,
                    event.location,
                    event.description,
                    event.category,
                    event.created_at,
                    event.updated_at,
                ),
            )

    def update_event(self, event: EventState) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                UPDATE events
                SET title = ?, starts_at = ?, ends_at = ?, location = ?, description = ?,
                    category = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    event.title,
                    event.starts_at,
                    event.ends_at,
                    event.location,
                    event.description,
                    event.category,
                    event.updated_at,
                    event.id,
                ),
            )

    def get_event(self, event_id: str) -> Optional[EventState]:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_EVENT_COLUMNS} FROM events WHERE id = ?",
                (event_id,),
            ).fetchone()
            if row is None:
                return None
            return self._row_to_event(row)

    def list_events(self, owner_id: str) -> List[EventState]:
        with self._connect() as conn:
            rows = conn.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM events
                WHERE owner_id = ?
                ORDER BY starts_at ASC, rowid ASC
                """,
                (owner_id,),
            ).fetchall()
            return [self._row_to_event(row) for row in rows]

    def delete_event(self, event_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM events WHERE id = ?", (event_id,))

    def _load_items(self, conn: sqlite3.Connection, list_id: str) -> List[TodoItemState]:
        rows = conn.execute(
            f"""
            SELECT {_TODO_ITEM_COLUMNS}
            FROM todo_items
            WHERE list_id = ?
            ORDER BY created_at DESC, rowid DESC
            """,
            (list_id,),
        ).fetchall()
        return [
            TodoItemState(
                id=row[0],
                list_id=row[1],
                text=row[2],
                completed=bool(row[3]),
                created_at=row[4],
            )
            for row in rows
        ]

    def _row_to_todo_list(self, conn: sqlite3.Connection, row: tuple) -> TodoListState:
        return TodoListState(
            id=row[0],
            owner_id=row[1],
            title=row[2],
            icon=row[3],
            items=self._load_items(conn, row[0]),
            created_at=row[4],
            updated_at=row[5],
        )

    def create_todo_list(self, todo_list: TodoListState) -> None:
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO todo_lists ({_TODO_LIST_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    todo_list.id,
                    todo_list.owner_id,
                    todo_list.title,
                    todo_list.icon,
                    todo_list.created_at,
                    todo_list.updated_at,
                ),
            )

    def update_todo_list(self, todo_list: TodoListState) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE todo_lists SET title = ?, icon = ?, updated_at = ? WHERE id = ?",
                (todo_list.title, todo_list.icon, todo_list.updated_at, todo_list.id),
            )

    def get_todo_list(self, list_id: str) -> Optional[TodoListState]:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_TODO_LIST_COLUMNS} FROM todo_lists WHERE id = ?",
                (list_id,),
            ).fetchone()
            if row is None:
                return None
            return self._row_to_todo_list(conn, row)

    def list_todo_lists(self, owner_id: str) -> List[TodoListState]:
        with self._connect() as conn:
            rows = conn.execute(
                f"""
                SELECT {_TODO_LIST_COLUMNS}
                FROM todo_lists
                WHERE owner_id = ?
                ORDER BY created_at ASC, rowid ASC
                """,
                (owner_id,),
            ).fetchall()
            return [self._row_to_todo_list(conn, row) for row in rows]

    def delete_todo_list(self, list_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM todo_items WHERE list_id = ?", (list_id,))
            conn.execute("DELETE FROM todo_lists WHERE id = ?", (list_id,))

    def add_todo_item(self, item: TodoItemState) -> None:
        with self._connect() as conn:
            exists = conn.execute(
                "SELECT 1 FROM todo_lists WHERE id = ?", (item.list_id,)
            ).fetchone()
            if exists is None:
                raise ValueError(f"Todo list '{item.list_id}' does not exist.")
            conn.execute(
                f"INSERT INTO todo_items ({_TODO_ITEM_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                (
                    item.id,
                    item.list_id,
                    item.text,
                    1 if item.completed else 0,
                    item.created_at,
                ),
            )

    def update_todo_item(self, item: TodoItemState) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE todo_items SET text = ?, completed = ? WHERE id = ?",
                (item.text, 1 if item.completed else 0, item.id),
            )

    def delete_todo_item(self, item_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM todo_items WHERE id = ?", (item_id,))
