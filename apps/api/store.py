from __future__ import annotations

import os

from packages.core.storage.sqlite import SQLiteStore


def default_db_path() -> str:
    data_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "data"))
    return os.getenv("PERSONALWEB_DB_PATH", os.path.join(data_dir, "personalweb.db"))


def default_store() -> SQLiteStore:
    return SQLiteStore(db_path=default_db_path())
