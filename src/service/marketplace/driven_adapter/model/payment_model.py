from datetime import date, datetime
from typing import Optional
import uuid

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class PaymentModel(Base):
    __tablename__ = 'payment'

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    booking_id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), nullable=False, unique=True
    )
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    method: Mapped[str] = mapped_column(String(50), nullable=False)
    ticket_title: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    seat: Mapped[str] = mapped_column(String(4), nullable=False, default='')
    from_location: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    to_location: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    departure_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    paid_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
