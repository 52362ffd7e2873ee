"""
Pytest configuration for booking availability tests
"""
import asyncio
import itertools
from typing import List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from booking_availability.core.exceptions import DuplicateBookingError
from booking_availability.database import Base
from booking_availability.models import Booking
from booking_availability.schemas.booking import BookingCreate


class InMemoryBookingStore:
    """BookingStore fake: same contract as SqlAlchemyBookingStore, kept in a list"""

    def __init__(self):
        self.bookings: List[Booking] = []
        self._ids = itertools.count(1)
        self.writes = 0

    async def find_by_guest_and_unit(self, guest_name, unit_id):
        return [
            b for b in self.bookings
            if b.guest_name == guest_name and b.unit_id == unit_id
        ]

    async def find_by_guest(self, guest_name):
        return [b for b in self.bookings if b.guest_name == guest_name]

    async def find_by_unit(self, unit_id):
        return sorted(
            (b for b in self.bookings if b.unit_id == unit_id),
            key=lambda b: b.check_in_date,
        )

    async def find_by_id(self, booking_id) -> Optional[Booking]:
        return next((b for b in self.bookings if b.id == booking_id), None)

    async def find_conflicting_by_unit_and_nights(self, unit_id, max_check_in, nights, exclude_id):
        return next(
            (
                b for b in self.bookings
                if b.unit_id == unit_id
                and b.check_in_date <= max_check_in
                and b.number_of_nights == nights
                and b.id != exclude_id
            ),
            None,
        )

    async def insert(self, candidate) -> Booking:
        # mirrors the (guest_name, unit_id) unique constraint
        if any(
            b.guest_name == candidate.guest_name and b.unit_id == candidate.unit_id
            for b in self.bookings
        ):
            raise DuplicateBookingError(candidate.guest_name, candidate.unit_id)

        booking = Booking(
            id=next(self._ids),
            guest_name=candidate.guest_name,
            unit_id=candidate.unit_id,
            check_in_date=candidate.check_in_date,
            number_of_nights=candidate.number_of_nights,
        )
        self.bookings.append(booking)
        self.writes += 1
        return booking

    async def update_nights(self, booking_id, new_nights) -> Optional[Booking]:
        booking = await self.find_by_id(booking_id)
        if not booking:
            return None
        booking.number_of_nights = new_nights
        self.writes += 1
        return booking


@pytest.fixture
def store():
    return InMemoryBookingStore()


@pytest.fixture
def make_candidate():
    """Factory for BookingCreate with the wire field names"""

    def _make(guest="Alice", unit="U1", check_in="2024-01-10", nights=3):
        return BookingCreate(
            guestName=guest,
            unitID=unit,
            checkInDate=check_in,
            numberOfNights=nights,
        )

    return _make


@pytest.fixture
def sample_booking_data():
    """Sample data for booking creation (scenario 1)"""
    return {
        "guestName": "Alice",
        "unitID": "U1",
        "checkInDate": "2024-01-10",
        "numberOfNights": 3,
    }


@pytest_asyncio.fixture
async def db_session():
    """AsyncSession on a fresh in-memory SQLite database"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    Session = async_sessionmaker(engine, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with Session() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def api_client(tmp_path):
    """TestClient with get_db pointed at a throwaway SQLite file"""
    from fastapi.testclient import TestClient

    from booking_availability.core.rate_limiter import limiter
    from booking_availability.database import get_db
    from booking_availability.main import app

    # NullPool: TestClient runs the app on its own event loop
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}", poolclass=NullPool
    )
    Session = async_sessionmaker(engine, expire_on_commit=False)

    async def create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_schema())

    async def override_get_db():
        async with Session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False

    yield TestClient(app)

    app.dependency_overrides.clear()
    limiter.enabled = True
    asyncio.run(engine.dispose())

