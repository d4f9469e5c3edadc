"""
Seat and booking reference generation

Seats are a row number 1-50 followed by a letter A-F (e.g. "12C").
Booking references are "TB-<UTC yyyymmddHHMMSS>-<6 base36 chars>".
"""

from datetime import datetime, timezone
import re
import secrets
import string
from typing import Optional

from src.platform.exception.exceptions import ValidationError


MAX_SEAT_ROW = 50
SEAT_LETTERS = 'ABCDEF'
SEAT_PATTERN = re.compile(r'^(?:[1-9]|[1-4][0-9]|50)[A-F]$')

_REFERENCE_ALPHABET = string.digits + string.ascii_uppercase
_REFERENCE_SUFFIX_LENGTH = 6


def generate_seat() -> str:
    row = secrets.randbelow(MAX_SEAT_ROW) + 1
    return f'{row}{secrets.choice(SEAT_LETTERS)}'


def normalize_seat(seat: str) -> str:
    normalized = seat.strip().upper()
    if not SEAT_PATTERN.match(normalized):
        raise ValidationError('Invalid seat format. Expected row 1-50 and letter A-F (e.g. 12C)')
    return normalized


def generate_booking_reference(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    suffix = ''.join(secrets.choice(_REFERENCE_ALPHABET) for _ in range(_REFERENCE_SUFFIX_LENGTH))
    return f'TB-{now.strftime("%Y%m%d%H%M%S")}-{suffix}'
