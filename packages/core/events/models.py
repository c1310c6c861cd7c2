from __future__ import annotations


CATEGORIES = ("personal", "work", "health", "entertainment", "chores", "other")

DEFAULT_CATEGORY = "personal"
