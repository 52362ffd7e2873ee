"""
SqlAlchemyBookingStore against an in-memory SQLite database
"""
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from booking_availability.core.exceptions import DuplicateBookingError, StoreFailure
from booking_availability.repositories.booking_store import SqlAlchemyBookingStore
from booking_availability.services.booking_service import BookingService


@pytest.mark.asyncio
async def test_insert_assigns_id_and_lookups(db_session, make_candidate):
    store = SqlAlchemyBookingStore(db_session)

    alice = await store.insert(make_candidate(guest="Alice", unit="U1", check_in="2024-01-10", nights=3))
    bob = await store.insert(make_candidate(guest="Bob", unit="U1", check_in="2024-01-20", nights=2))
    carol = await store.insert(make_candidate(guest="Carol", unit="U2", check_in="2024-01-10", nights=1))

    assert alice.id is not None and bob.id is not None and alice.id != bob.id
    assert alice.created_at is not None

    assert [b.id for b in await store.find_by_guest_and_unit("Alice", "U1")] == [alice.id]
    assert await store.find_by_guest_and_unit("Alice", "U2") == []
    assert [b.id for b in await store.find_by_guest("Carol")] == [carol.id]
    assert [b.id for b in await store.find_by_unit("U1")] == [alice.id, bob.id]
    assert (await store.find_by_id(bob.id)).guest_name == "Bob"
    assert await store.find_by_id(12345) is None


@pytest.mark.asyncio
async def test_unique_guest_unit_constraint(db_session, make_candidate):
    store = SqlAlchemyBookingStore(db_session)
    await store.insert(make_candidate(guest="Alice", unit="U1"))

    with pytest.raises(DuplicateBookingError):
        await store.insert(make_candidate(guest="Alice", unit="U1", check_in="2025-01-01"))

    # session is usable again after the rollback
    assert len(await store.find_by_guest("Alice")) == 1


@pytest.mark.asyncio
async def test_find_conflicting_by_unit_and_nights(db_session, make_candidate):
    store = SqlAlchemyBookingStore(db_session)
    alice = await store.insert(make_candidate(guest="Alice", unit="U1", check_in="2024-01-10", nights=5))
    bob = await store.insert(make_candidate(guest="Bob", unit="U1", check_in="2024-01-14", nights=5))
    await store.insert(make_candidate(guest="Dave", unit="U2", check_in="2024-01-01", nights=5))

    found = await store.find_conflicting_by_unit_and_nights("U1", date(2024, 1, 15), 5, alice.id)
    assert found.id == bob.id
    # check-in exactly on the bound matches
    found = await store.find_conflicting_by_unit_and_nights("U1", date(2024, 1, 14), 5, alice.id)
    assert found.id == bob.id

    # check-in after the bound
    assert await store.find_conflicting_by_unit_and_nights("U1", date(2024, 1, 13), 5, alice.id) is None
    # different night count
    assert await store.find_conflicting_by_unit_and_nights("U1", date(2024, 1, 15), 6, alice.id) is None
    # the only match is the excluded booking itself
    assert await store.find_conflicting_by_unit_and_nights("U1", date(2024, 1, 10), 5, alice.id) is None
    assert (await store.find_conflicting_by_unit_and_nights("U1", date(2024, 1, 10), 5, bob.id)).id == alice.id


@pytest.mark.asyncio
async def test_update_nights(db_session, make_candidate):
    store = SqlAlchemyBookingStore(db_session)
    booking = await store.insert(make_candidate(nights=3))

    updated = await store.update_nights(booking.id, 5)
    assert updated.number_of_nights == 5
    assert updated.check_in_date == date(2024, 1, 10)
    assert (await store.find_by_id(booking.id)).number_of_nights == 5

    assert await store.update_nights(999, 5) is None


@pytest.mark.asyncio
async def test_sql_error_wrapped_as_store_failure(db_session):
    store = SqlAlchemyBookingStore(db_session)
    error = OperationalError("SELECT", {}, Exception("database is locked"))

    with patch.object(db_session, "execute", AsyncMock(side_effect=error)):
        with pytest.raises(StoreFailure):
            await store.find_by_guest("Alice")


@pytest.mark.asyncio
async def test_service_scenarios_on_sqlite(db_session, make_candidate):
    """Scenarios 1-6 end to end on the real store"""
    service = BookingService(SqlAlchemyBookingStore(db_session))

    created = await service.create_booking(make_candidate())
    assert created.admitted is True
    booking_id = created.booking.id

    assert (await service.create_booking(make_candidate(check_in="2024-02-01", nights=1))).admitted is False
    assert (await service.create_booking(make_candidate(unit="U2", check_in="2024-02-01", nights=1))).admitted is False
    assert (await service.create_booking(make_candidate(guest="Bob", check_in="2024-01-11", nights=2))).admitted is False
    assert (await service.create_booking(make_candidate(guest="Carol", check_in="2024-01-20", nights=2))).admitted is True

    extended = await service.extend_booking(booking_id, 2)
    assert extended.admitted is True
    assert extended.booking.number_of_nights == 5
    assert extended.booking.check_in_date == date(2024, 1, 10)
