from datetime import date, datetime, time, timezone
from typing import Any, List, Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import DomainError, ForbiddenError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.enum.verification_status import VerificationStatus


# Fields a vendor may change on an existing listing
VENDOR_EDITABLE_FIELDS = frozenset(
    {
        'title',
        'image',
        'from_location',
        'to_location',
        'transport_type',
        'departure_date',
        'departure_time',
        'price',
        'quantity',
        'perks',
    }
)


@attrs.define
class Ticket:
    id: UUID
    vendor_email: str
    title: str
    price: int
    quantity: int
    from_location: str
    to_location: str
    departure_date: date
    departure_time: time
    transport_type: str = ''
    image: Optional[str] = None
    perks: List[str] = attrs.field(factory=list)
    verification_status: VerificationStatus = VerificationStatus.PENDING
    is_advertised: bool = False
    is_hidden: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        vendor_email: str,
        title: str,
        price: int,
        quantity: int,
        from_location: str,
        to_location: str,
        departure_date: date,
        departure_time: time,
        transport_type: str = '',
        image: Optional[str] = None,
        perks: Optional[List[str]] = None,
    ) -> 'Ticket':
        cls._validate_listing(title=title, price=price, quantity=quantity)

        now = datetime.now(timezone.utc)
        # New listings always start unverified, not advertised and visible
        return cls(
            id=id,
            vendor_email=vendor_email,
            title=title.strip(),
            price=price,
            quantity=quantity,
            from_location=from_location,
            to_location=to_location,
            departure_date=departure_date,
            departure_time=departure_time,
            transport_type=transport_type,
            image=image,
            perks=perks or [],
            verification_status=VerificationStatus.PENDING,
            is_advertised=False,
            is_hidden=False,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def _validate_listing(*, title: str, price: int, quantity: int) -> None:
        if not title or not title.strip():
            raise ValidationError('Ticket title is required')
        if price < 0:
            raise ValidationError('Price must not be negative')
        if quantity < 0:
            raise ValidationError('Quantity must not be negative')

    @property
    def is_publicly_visible(self) -> bool:
        return self.verification_status == VerificationStatus.APPROVED and not self.is_hidden

    @property
    def departure_at(self) -> datetime:
        return datetime.combine(self.departure_date, self.departure_time, tzinfo=timezone.utc)

    def validate_owned_by(self, vendor_email: str) -> None:
        if self.vendor_email != vendor_email:
            raise ForbiddenError('Not authorized')

    def validate_bookable(self, *, quantity: int) -> None:
        if not self.is_publicly_visible:
            raise DomainError('Ticket is not available for booking')
        if quantity < 1:
            raise ValidationError('Quantity must be at least 1')
        if self.quantity < quantity:
            raise DomainError('Not enough tickets available')

    @Logger.io
    def apply_vendor_update(self, changes: dict[str, Any]) -> 'Ticket':
        unknown = set(changes) - VENDOR_EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f'Fields cannot be updated: {", ".join(sorted(unknown))}')

        updated = attrs.evolve(self, **changes, updated_at=datetime.now(timezone.utc))
        self._validate_listing(
            title=updated.title, price=updated.price, quantity=updated.quantity
        )
        return updated

    @Logger.io
    def verify(self, verification_status: str) -> 'Ticket':
        if verification_status not in (VerificationStatus.APPROVED, VerificationStatus.REJECTED):
            raise ValidationError('Invalid verification status')
        status = VerificationStatus(verification_status)
        # Only approved tickets may stay advertised
        return attrs.evolve(
            self,
            verification_status=status,
            is_advertised=self.is_advertised and status == VerificationStatus.APPROVED,
            updated_at=datetime.now(timezone.utc),
        )
