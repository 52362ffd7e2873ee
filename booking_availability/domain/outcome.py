from dataclasses import dataclass
from enum import Enum
from typing import Optional

from booking_availability.core.messages import messages
from booking_availability.models import Booking


class OutcomeStatus(str, Enum):
    ADMITTED = "admitted"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class Outcome:
    """
    Result of an availability decision.

    Rejections are values, not exceptions: callers branch on ``status``.
    ``booking`` holds the stored record once a write went through (or the
    existing record for read-only decisions).
    """

    status: OutcomeStatus
    reason: str
    booking: Optional[Booking] = None

    @property
    def admitted(self) -> bool:
        return self.status is OutcomeStatus.ADMITTED

    @classmethod
    def admit(cls, booking: Optional[Booking] = None) -> "Outcome":
        return cls(OutcomeStatus.ADMITTED, messages.OK, booking)

    @classmethod
    def reject(cls, reason: str) -> "Outcome":
        return cls(OutcomeStatus.REJECTED, reason)

    @classmethod
    def not_found(cls) -> "Outcome":
        return cls(OutcomeStatus.NOT_FOUND, messages.BOOKING_NOT_FOUND)

    @classmethod
    def invalid_input(cls, reason: str) -> "Outcome":
        return cls(OutcomeStatus.INVALID_INPUT, reason)

    def with_booking(self, booking: Booking) -> "Outcome":
        return Outcome(self.status, self.reason, booking)
