import logging
from datetime import date
from typing import Any, Optional

from booking_availability.core.exceptions import DuplicateBookingError
from booking_availability.core.messages import messages
from booking_availability.domain.outcome import Outcome, OutcomeStatus
from booking_availability.domain.rules import MAX_NIGHTS, extended_nights
from booking_availability.repositories.booking_store import BookingStore
from booking_availability.schemas.booking import BookingCreate
from booking_availability.services.availability_checker import AvailabilityChecker

logger = logging.getLogger(__name__)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_night_count(value: Any) -> bool:
    return _is_positive_int(value) and value <= MAX_NIGHTS


def _validate_candidate(candidate: BookingCreate) -> Optional[str]:
    """Returns an error message or None if the candidate is well-formed"""
    for field in ("guest_name", "unit_id"):
        value = getattr(candidate, field, None)
        if not isinstance(value, str) or not value:
            return messages.missing_field(field)

    check_in_date = getattr(candidate, "check_in_date", None)
    if not isinstance(check_in_date, date):
        return messages.invalid_date("check_in_date")

    if not _is_night_count(getattr(candidate, "number_of_nights", None)):
        return messages.nights_range("number_of_nights", MAX_NIGHTS)

    return None


class BookingService:
    """
    Сервис бизнес-логики для бронирований.

    Check-then-write: the store is touched for writing only after the
    AvailabilityChecker admitted the request. The pair (guest, unit) is also
    protected by a unique constraint; the other rules are not atomic with
    the write.
    """

    def __init__(self, store: BookingStore):
        self.store = store
        self.checker = AvailabilityChecker(store)

    async def create_booking(self, candidate: BookingCreate) -> Outcome:
        """Создание новой брони"""
        error = _validate_candidate(candidate)
        if error:
            return Outcome.invalid_input(error)

        outcome = await self.checker.check_new_booking(candidate)
        if not outcome.admitted:
            logger.info(
                f"Booking rejected for guest '{candidate.guest_name}' "
                f"unit '{candidate.unit_id}' on {candidate.check_in_date}: {outcome.reason}"
            )
            return outcome

        try:
            booking = await self.store.insert(candidate)
        except DuplicateBookingError as e:
            logger.info(f"Booking rejected on insert: {e}")
            return Outcome.reject(messages.SAME_GUEST_SAME_UNIT)

        logger.info(
            f"✅ Booking #{booking.id} created: {booking.guest_name} in {booking.unit_id} "
            f"from {booking.check_in_date} for {booking.number_of_nights} nights"
        )
        return outcome.with_booking(booking)

    async def extend_booking(self, booking_id: Any, additional_nights: Any) -> Outcome:
        """Продление брони без изменения даты заезда"""
        if booking_id is None or booking_id == "":
            return Outcome.invalid_input(messages.BOOKING_ID_REQUIRED)
        if not _is_positive_int(booking_id):
            return Outcome.invalid_input(messages.positive_integer("booking_id"))
        if not _is_night_count(additional_nights):
            return Outcome.invalid_input(messages.nights_range("additional_nights", MAX_NIGHTS))

        outcome = await self.checker.check_extension(booking_id, additional_nights)
        if outcome.status is OutcomeStatus.NOT_FOUND:
            logger.warning(f"Booking {booking_id} not found for extension")
            return outcome
        if not outcome.admitted:
            logger.info(f"Extension of booking #{booking_id} rejected: {outcome.reason}")
            return outcome

        new_nights = extended_nights(outcome.booking, additional_nights)
        updated = await self.store.update_nights(booking_id, new_nights)
        if not updated:
            return Outcome.not_found()

        logger.info(f"✅ Booking #{booking_id} extended to {new_nights} nights")
        return outcome.with_booking(updated)

    async def get_booking(self, booking_id: int) -> Outcome:
        """Получить бронь по ID"""
        booking = await self.store.find_by_id(booking_id)
        if not booking:
            return Outcome.not_found()
        return Outcome.admit(booking)
