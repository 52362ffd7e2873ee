from datetime import date, datetime

from sqlalchemy import String, Integer, Date, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from booking_availability.database import Base


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # A guest books a given unit at most once, even under concurrent inserts
        UniqueConstraint("guest_name", "unit_id", name="uq_bookings_guest_unit"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    guest_name: Mapped[str] = mapped_column(String, index=True)
    unit_id: Mapped[str] = mapped_column(String, index=True)

    check_in_date: Mapped[date] = mapped_column(Date)
    number_of_nights: Mapped[int] = mapped_column(Integer)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<Booking #{self.id} {self.guest_name!r} unit={self.unit_id!r} "
            f"{self.check_in_date} x{self.number_of_nights}>"
        )
