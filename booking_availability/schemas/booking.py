from datetime import date, datetime, timezone
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from booking_availability.domain.rules import MAX_NIGHTS

_datetime_adapter = TypeAdapter(datetime)


class BookingBase(BaseModel):
    # Wire names follow the public API (guestName, unitID, ...)
    model_config = ConfigDict(populate_by_name=True)

    guest_name: str = Field(..., alias="guestName", min_length=1)
    unit_id: str = Field(..., alias="unitID", min_length=1)
    check_in_date: date = Field(..., alias="checkInDate")
    number_of_nights: int = Field(..., alias="numberOfNights", ge=1, le=MAX_NIGHTS)

    @field_validator("check_in_date", mode="before")
    @classmethod
    def normalize_check_in_date(cls, value):
        """
        Drop time of day: "2024-01-10T00:00:00.000Z" or "2024-01-10 18:45:00"
        -> date(2024, 1, 10). Aware datetimes are converted to UTC first.
        """
        if isinstance(value, str) and len(value) > 10:
            # pydantic's parser, not fromisoformat: same result on every Python
            try:
                value = _datetime_adapter.validate_python(value)
            except ValidationError:
                # Leave it to the date validator to report
                return value
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc)
            return value.date()
        return value


class BookingCreate(BookingBase):
    pass


class BookingExtend(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    additional_nights: int = Field(..., alias="additionalNights", ge=1, le=MAX_NIGHTS)


class BookingOut(BookingBase):
    id: int
    # Extensions can push a stored stay past MAX_NIGHTS
    number_of_nights: int = Field(..., alias="numberOfNights", ge=1)

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class RejectionOut(BaseModel):
    result: Literal[False] = False
    reason: str
