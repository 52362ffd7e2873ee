from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from booking_availability.database import get_db
from booking_availability.repositories.booking_store import SqlAlchemyBookingStore
from booking_availability.services.booking_service import BookingService


async def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    return BookingService(SqlAlchemyBookingStore(db))
