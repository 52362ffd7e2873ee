import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from booking_availability.core.rate_limiter import create_limit, extend_limit, limiter
from booking_availability.api.deps import get_booking_service
from booking_availability.domain.outcome import Outcome, OutcomeStatus
from booking_availability.schemas.booking import (
    BookingCreate,
    BookingExtend,
    BookingOut,
    RejectionOut,
)
from booking_availability.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])
logger = logging.getLogger(__name__)

STATUS_CODES = {
    OutcomeStatus.REJECTED: status.HTTP_400_BAD_REQUEST,
    OutcomeStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeStatus.INVALID_INPUT: 422,
}

ERROR_RESPONSES = {
    400: {"model": RejectionOut, "description": "Booking conflicts with existing bookings"},
    404: {"model": RejectionOut, "description": "Booking not found"},
}


def outcome_response(outcome: Outcome):
    """Admitted -> BookingOut, anything else -> {result: false, reason}"""
    if outcome.admitted:
        return BookingOut.model_validate(outcome.booking)

    return JSONResponse(
        status_code=STATUS_CODES[outcome.status],
        content=RejectionOut(reason=outcome.reason).model_dump(),
    )


@router.post("", response_model=BookingOut, responses=ERROR_RESPONSES)
@limiter.limit(create_limit)
async def create_booking(
    request: Request,
    booking_in: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Create a booking if the unit and the guest are available.
    """
    outcome = await service.create_booking(booking_in)
    return outcome_response(outcome)


@router.post("/{booking_id}/extend", response_model=BookingOut, responses=ERROR_RESPONSES)
@limiter.limit(extend_limit)
async def extend_booking(
    request: Request,
    booking_id: int,
    extend_in: BookingExtend,
    service: BookingService = Depends(get_booking_service),
):
    """
    Add nights to an existing booking. The check-in date stays the same.
    """
    outcome = await service.extend_booking(booking_id, extend_in.additional_nights)
    return outcome_response(outcome)


@router.get("/{booking_id}", response_model=BookingOut, responses=ERROR_RESPONSES)
async def get_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
):
    outcome = await service.get_booking(booking_id)
    return outcome_response(outcome)
