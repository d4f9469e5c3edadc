from datetime import date, datetime, time
from typing import Optional
import uuid

from sqlalchemy import Date, DateTime, Index, Integer, String, Time, text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class BookingModel(Base):
    __tablename__ = 'booking'

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    # No FK: bookings outlive deleted tickets through the snapshot columns below
    ticket_id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    vendor_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)
    seat: Mapped[str] = mapped_column(String(4), nullable=False)
    booking_reference: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    ticket_title: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    ticket_image: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    from_location: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    to_location: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    departure_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    departure_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    transaction_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        # One active booking per seat; cancelled bookings free the seat
        Index(
            'uq_booking_ticket_seat_active',
            'ticket_id',
            'seat',
            unique=True,
            postgresql_where=text("status IN ('pending', 'confirmed')"),
        ),
    )
