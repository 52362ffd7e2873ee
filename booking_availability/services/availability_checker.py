import logging

from booking_availability.core.messages import messages
from booking_availability.domain.outcome import Outcome
from booking_availability.domain.rules import extension_window, occupies_check_in
from booking_availability.repositories.booking_store import BookingStore
from booking_availability.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)


class AvailabilityChecker:
    """
    Решает, можно ли принять бронь. Ничего не пишет в хранилище.

    Rules are evaluated in order and the first failing one decides the
    reason. Calling a check twice against the same store state returns the
    same outcome.
    """

    def __init__(self, store: BookingStore):
        self.store = store

    async def check_new_booking(self, candidate: BookingCreate) -> Outcome:
        # check 1: the same guest cannot book the same unit twice
        same_guest_same_unit = await self.store.find_by_guest_and_unit(
            candidate.guest_name, candidate.unit_id
        )
        if same_guest_same_unit:
            return Outcome.reject(messages.SAME_GUEST_SAME_UNIT)

        # check 2: one booking per guest, whatever the unit or dates
        same_guest = await self.store.find_by_guest(candidate.guest_name)
        if same_guest:
            return Outcome.reject(messages.GUEST_MULTIPLE_UNITS)

        # check 3: unit is free on the requested check-in date
        unit_bookings = await self.store.find_by_unit(candidate.unit_id)
        for existing in unit_bookings:
            if occupies_check_in(existing, candidate.check_in_date):
                logger.debug(
                    f"Unit {candidate.unit_id} check-in {candidate.check_in_date} "
                    f"clashes with booking #{existing.id}"
                )
                return Outcome.reject(messages.UNIT_OCCUPIED)

        return Outcome.admit()

    async def check_extension(self, booking_id: int, additional_nights: int) -> Outcome:
        """
        Admitted outcome carries the current (not yet extended) booking.
        """
        existing = await self.store.find_by_id(booking_id)
        if not existing:
            return Outcome.not_found()

        try:
            updated_nights, updated_end_date = extension_window(existing, additional_nights)
        except OverflowError:
            return Outcome.invalid_input(messages.STAY_OUT_OF_RANGE)

        conflict = await self.store.find_conflicting_by_unit_and_nights(
            unit_id=existing.unit_id,
            max_check_in=updated_end_date,
            nights=updated_nights,
            exclude_id=existing.id,
        )
        if conflict:
            logger.debug(
                f"Extension of #{existing.id} to {updated_nights} nights "
                f"conflicts with booking #{conflict.id}"
            )
            return Outcome.reject(messages.UNIT_OCCUPIED)

        return Outcome.admit(existing)
