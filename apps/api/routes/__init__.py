from .dates import router as dates_router
from .events import router as events_router
from .reminders import router as reminders_router
from .todos import router as todos_router
from .users import router as users_router

__all__ = [
    "dates_router",
    "events_router",
    "reminders_router",
    "todos_router",
    "users_router",
]
