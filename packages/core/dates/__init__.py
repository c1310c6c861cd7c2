from .models import CATEGORIES, CATEGORY_LABELS, category_label
from .recurrence import (
    ReminderWindow,
    add_years,
    local_today,
    next_occurrence,
    parse_iso_date,
)
from .service import (
    create_dated_record,
    delete_dated_record,
    list_visible_records,
    update_dated_record,
)

__all__ = [
    "CATEGORIES",
    "CATEGORY_LABELS",
    "ReminderWindow",
    "add_years",
    "category_label",
    "create_dated_record",
    "delete_dated_record",
    "list_visible_records",
    "local_today",
    "next_occurrence",
    "parse_iso_date",
    "update_dated_record",
]
