import logging
import datetime
from typing import List, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_availability.core.exceptions import DuplicateBookingError, StoreFailure
from booking_availability.models import Booking
from booking_availability.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)


class BookingStore(Protocol):
    """Query primitives the availability checker relies on"""

    async def find_by_guest_and_unit(self, guest_name: str, unit_id: str) -> List[Booking]: ...

    async def find_by_guest(self, guest_name: str) -> List[Booking]: ...

    async def find_by_unit(self, unit_id: str) -> List[Booking]: ...

    async def find_by_id(self, booking_id: int) -> Optional[Booking]: ...

    async def find_conflicting_by_unit_and_nights(
        self,
        unit_id: str,
        max_check_in: datetime.date,
        nights: int,
        exclude_id: int,
    ) -> Optional[Booking]: ...

    async def insert(self, candidate: BookingCreate) -> Booking: ...

    async def update_nights(self, booking_id: int, new_nights: int) -> Optional[Booking]: ...


class SqlAlchemyBookingStore:
    """
    BookingStore on top of an AsyncSession.
    One instance per request; writes are committed immediately.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _all(self, stmt) -> List[Booking]:
        try:
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"❌ Booking store query failed: {e}", exc_info=True)
            raise StoreFailure(str(e)) from e

    async def _first(self, stmt) -> Optional[Booking]:
        try:
            result = await self.session.execute(stmt.limit(1))
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"❌ Booking store query failed: {e}", exc_info=True)
            raise StoreFailure(str(e)) from e

    async def find_by_guest_and_unit(self, guest_name: str, unit_id: str) -> List[Booking]:
        return await self._all(
            select(Booking).where(
                Booking.guest_name == guest_name,
                Booking.unit_id == unit_id,
            )
        )

    async def find_by_guest(self, guest_name: str) -> List[Booking]:
        return await self._all(select(Booking).where(Booking.guest_name == guest_name))

    async def find_by_unit(self, unit_id: str) -> List[Booking]:
        return await self._all(
            select(Booking).where(Booking.unit_id == unit_id).order_by(Booking.check_in_date)
        )

    async def find_by_id(self, booking_id: int) -> Optional[Booking]:
        return await self._first(select(Booking).where(Booking.id == booking_id))

    async def find_conflicting_by_unit_and_nights(
        self,
        unit_id: str,
        max_check_in: datetime.date,
        nights: int,
        exclude_id: int,
    ) -> Optional[Booking]:
        return await self._first(
            select(Booking).where(
                Booking.unit_id == unit_id,
                Booking.check_in_date <= max_check_in,
                Booking.number_of_nights == nights,
                Booking.id != exclude_id,
            )
        )

    async def insert(self, candidate: BookingCreate) -> Booking:
        booking = Booking(
            guest_name=candidate.guest_name,
            unit_id=candidate.unit_id,
            check_in_date=candidate.check_in_date,
            number_of_nights=candidate.number_of_nights,
        )
        try:
            self.session.add(booking)
            await self.session.commit()
            await self.session.refresh(booking)
            return booking
        except IntegrityError as e:
            # Lost the race against a concurrent insert of the same pair
            await self.session.rollback()
            logger.warning(
                f"Unique constraint hit for guest '{candidate.guest_name}' "
                f"unit '{candidate.unit_id}': {e.orig}"
            )
            raise DuplicateBookingError(candidate.guest_name, candidate.unit_id) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"❌ Booking insert failed: {e}", exc_info=True)
            raise StoreFailure(str(e)) from e

    async def update_nights(self, booking_id: int, new_nights: int) -> Optional[Booking]:
        try:
            booking = await self.session.get(Booking, booking_id)
            if not booking:
                return None

            booking.number_of_nights = new_nights
            await self.session.commit()
            await self.session.refresh(booking)
            return booking
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"❌ Booking #{booking_id} update failed: {e}", exc_info=True)
            raise StoreFailure(str(e)) from e
