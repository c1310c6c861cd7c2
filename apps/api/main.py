from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

try:
    from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
except Exception:  # pragma: no cover - optional dependency resolution
    FastAPIInstrumentor = None

from apps.api.notifications import default_transport
from apps.api.observability import init_observability
from apps.api.reminders_scheduler import ReminderScheduler
from apps.api.routes.dates import router as dates_router
from apps.api.routes.events import router as events_router
from apps.api.routes.reminders import router as reminders_router
from apps.api.routes.todos import router as todos_router
from apps.api.routes.users import router as users_router
from apps.api.store import default_store
from packages.core.logging_config import configure_logging


configure_logging()

init_observability()
app = FastAPI(title="PersonalWeb API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
if FastAPIInstrumentor is not None:
    FastAPIInstrumentor.instrument_app(app)
else:
    logging.getLogger("personalweb.api").warning(
        "OpenTelemetry instrumentation not available. "
        "Install observability dependencies to enable tracing."
    )
app.include_router(users_router)
app.include_router(dates_router)
app.include_router(events_router)
app.include_router(todos_router)
app.include_router(reminders_router)
app.state.reminder_scheduler = None


@app.on_event("startup")
def _start_reminder_scheduler() -> None:
    if os.getenv("REMINDERS_SCHEDULER_ENABLED", "true").lower() != "true":
        return
    if app.state.reminder_scheduler is not None:
        return
    scheduler = ReminderScheduler(default_store(), default_transport())
    scheduler.start()
    app.state.reminder_scheduler = scheduler


@app.on_event("shutdown")
def _stop_reminder_scheduler() -> None:
    scheduler = app.state.reminder_scheduler
    if scheduler is None:
        return
    scheduler.stop()
    app.state.reminder_scheduler = None
