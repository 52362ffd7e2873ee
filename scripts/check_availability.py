"""Read-only admission check against the configured database"""
import asyncio
import argparse

from booking_availability.database import AsyncSessionLocal, init_db
from booking_availability.repositories.booking_store import SqlAlchemyBookingStore
from booking_availability.schemas.booking import BookingCreate
from booking_availability.services.availability_checker import AvailabilityChecker


async def check(guest_name, unit_id, check_in_date, nights):
    await init_db()

    candidate = BookingCreate(
        guest_name=guest_name,
        unit_id=unit_id,
        check_in_date=check_in_date,
        number_of_nights=nights,
    )

    async with AsyncSessionLocal() as session:
        checker = AvailabilityChecker(SqlAlchemyBookingStore(session))
        outcome = await checker.check_new_booking(candidate)

    if outcome.admitted:
        print(f"✅ {unit_id} is available for {guest_name} from {candidate.check_in_date} ({nights} nights)")
    else:
        print(f"❌ {outcome.reason}")
    return outcome


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("guest_name", help="Guest name")
    parser.add_argument("unit_id", help="Unit ID")
    parser.add_argument("check_in_date", help="Check-in date, YYYY-MM-DD")
    parser.add_argument("nights", type=int, help="Number of nights")
    args = parser.parse_args()

    asyncio.run(check(args.guest_name, args.unit_id, args.check_in_date, args.nights))
