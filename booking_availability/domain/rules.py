"""
Day arithmetic behind the availability rules.

Both predicates below are narrower than a full interval overlap test:

* ``occupies_check_in`` compares only the candidate's check-in against the
  existing stay's forward extent. A candidate that checks in before an
  existing booking yields a negative day count and is always refused;
  a candidate whose own stay runs into a later booking is not looked at.
* the extension conflict query (see ``extension_window``) matches on the
  *new* night count, not on interval overlap.
"""
import datetime

from booking_availability.models import Booking

# Upper bound for numberOfNights / additionalNights accepted from callers (10 years)
MAX_NIGHTS = 3650


def whole_days_between(start: datetime.date, end: datetime.date) -> int:
    """Signed number of whole days from ``start`` to ``end``"""
    return (end - start).days


def occupies_check_in(existing: Booking, check_in_date: datetime.date) -> bool:
    days = whole_days_between(existing.check_in_date, check_in_date)
    return days <= existing.number_of_nights


def extended_nights(existing: Booking, additional_nights: int) -> int:
    return existing.number_of_nights + additional_nights


def extension_window(
    existing: Booking, additional_nights: int
) -> tuple[int, datetime.date]:
    """(updated_nights, updated_end_date) for an extension request"""
    updated_nights = extended_nights(existing, additional_nights)
    updated_end_date = existing.check_in_date + datetime.timedelta(days=updated_nights)
    return updated_nights, updated_end_date
