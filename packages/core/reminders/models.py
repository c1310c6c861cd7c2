from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class SendResult:
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


@runtime_checkable
class EmailTransport(Protocol):
    def send(
        self, to_email: str, subject: str, html: str, text: Optional[str] = None
    ) -> SendResult:
        """Deliver one message. Failures are reported, not raised."""


@dataclass(frozen=True)
class ReminderMessage:
    to_email: str
    subject: str
    html: str
    text: str


SENT = "sent"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass(frozen=True)
class ReminderOutcome:
    status: str
    user_id: str
    record_id: str
    reason: Optional[str] = None
    days_until: Optional[int] = None
    occurrence: Optional[dt.date] = None
    message_id: Optional[str] = None


@dataclass
class RunSummary:
    today: dt.date
    outcomes: List[ReminderOutcome] = field(default_factory=list)
    users_checked: int = 0
    users_without_email: int = 0

    def add(self, outcome: ReminderOutcome) -> "RunSummary":
        self.outcomes.append(outcome)
        return self

    def _with_status(self, status: str) -> List[ReminderOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status == status]

    @property
    def sent(self) -> List[ReminderOutcome]:
        return self._with_status(SENT)

    @property
    def skipped(self) -> List[ReminderOutcome]:
        return self._with_status(SKIPPED)

    @property
    def failed(self) -> List[ReminderOutcome]:
        return self._with_status(FAILED)

    def counts(self) -> Dict[str, int]:
        return {
            SENT: len(self.sent),
            SKIPPED: len(self.skipped),
            FAILED: len(self.failed),
        }
