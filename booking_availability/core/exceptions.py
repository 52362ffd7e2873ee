"""
Exceptions raised by the booking store.

Business rejections are never raised: they travel as an ``Outcome``.
Only store-level problems end up here.
"""


class BookingAvailabilityError(Exception):
    """Base class for errors of this service"""


class StoreFailure(BookingAvailabilityError):
    """The booking store could not serve the request (unreachable, SQL error)."""


class DuplicateBookingError(BookingAvailabilityError):
    """Insert hit the (guest_name, unit_id) unique constraint."""

    def __init__(self, guest_name: str, unit_id: str):
        self.guest_name = guest_name
        self.unit_id = unit_id
        super().__init__(
            f"Booking for guest '{guest_name}' in unit '{unit_id}' already exists"
        )
