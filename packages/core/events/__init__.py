from .models import CATEGORIES, DEFAULT_CATEGORY
from .service import (
    create_event,
    delete_event,
    list_visible_events,
    update_event,
)

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "create_event",
    "delete_event",
    "list_visible_events",
    "update_event",
]
