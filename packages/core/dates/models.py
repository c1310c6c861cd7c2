from __future__ import annotations

from typing import Dict, Optional


CATEGORY_LABELS: Dict[str, str] = {
    "birthday": "Birthday",
    "anniversary": "Anniversary",
    "bill": "Bill Payment",
    "event": "Special Event",
    "other": "Other",
}

CATEGORIES = tuple(CATEGORY_LABELS)

DEFAULT_CATEGORY = "other"

# Label used when a stored record has no category or one we no longer know.
FALLBACK_CATEGORY_LABEL = "Event"


def category_label(category: Optional[str]) -> str:
    if not category:
        return FALLBACK_CATEGORY_LABEL
    return CATEGORY_LABELS.get(category, FALLBACK_CATEGORY_LABEL)
