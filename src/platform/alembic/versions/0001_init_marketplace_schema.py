"""init_marketplace_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- user: accounts keyed by email, role customer/vendor/admin, fraud flag
- ticket: vendor listings with inventory, verification, advertised and hidden flags
- booking: seat reservations; one active booking per (ticket_id, seat)
- payment: one settled payment per booking, append-only

booking.ticket_id carries no foreign key: bookings keep a snapshot of the trip
and survive the deletion of their ticket.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('photo_url', sa.String(length=2048), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='customer'),
        sa.Column('is_fraud', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column('last_logged_in', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'ticket',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('vendor_email', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('image', sa.String(length=2048), nullable=True),
        sa.Column('from_location', sa.String(length=255), nullable=False),
        sa.Column('to_location', sa.String(length=255), nullable=False),
        sa.Column('transport_type', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('departure_date', sa.Date(), nullable=False),
        sa.Column('departure_time', sa.Time(), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('perks', JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column(
            'verification_status', sa.String(length=20), nullable=False, server_default='pending'
        ),
        sa.Column('is_advertised', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_hidden', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_ticket_vendor_email'), 'ticket', ['vendor_email'])
    op.create_index(
        'ix_ticket_public_created_at',
        'ticket',
        ['created_at'],
        postgresql_where=sa.text("verification_status = 'approved' AND NOT is_hidden"),
    )

    op.create_table(
        'booking',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('ticket_id', UUID(as_uuid=True), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('vendor_email', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Integer(), nullable=False),
        sa.Column('total_price', sa.Integer(), nullable=False),
        sa.Column('seat', sa.String(length=4), nullable=False),
        sa.Column('booking_reference', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('ticket_title', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('ticket_image', sa.String(length=2048), nullable=True),
        sa.Column('from_location', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('to_location', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('departure_date', sa.Date(), nullable=True),
        sa.Column('departure_time', sa.Time(), nullable=True),
        sa.Column('transaction_id', sa.String(length=255), nullable=True),
        sa.Column('payment_method', sa.String(length=50), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_reference', name='uq_booking_booking_reference'),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled')", name='ck_booking_status'
        ),
    )
    op.create_index(op.f('ix_booking_customer_email'), 'booking', ['customer_email'])
    op.create_index(op.f('ix_booking_vendor_email'), 'booking', ['vendor_email'])
    # Anti double booking: one active booking per seat, cancelled rows free the seat
    op.create_index(
        'uq_booking_ticket_seat_active',
        'booking',
        ['ticket_id', 'seat'],
        unique=True,
        postgresql_where=sa.text("status IN ('pending', 'confirmed')"),
    )

    op.create_table(
        'payment',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('booking_id', UUID(as_uuid=True), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('transaction_id', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('method', sa.String(length=50), nullable=False),
        sa.Column('ticket_title', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('seat', sa.String(length=4), nullable=False, server_default=''),
        sa.Column('from_location', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('to_location', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('departure_date', sa.Date(), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_id', name='uq_payment_booking_id'),
    )
    op.create_index(op.f('ix_payment_customer_email'), 'payment', ['customer_email'])


def downgrade() -> None:
    op.drop_table('payment')
    op.drop_table('booking')
    op.drop_table('ticket')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
