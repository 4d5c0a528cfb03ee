"""Create bookings, booking slot locks and menu items

Revision ID: 5b1e7c3a9d20
Revises:
Create Date: 2026-10-19 12:00:00.000000+00:00

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5b1e7c3a9d20"
down_revision = None
branch_labels = None
depends_on = None


booking_status = sa.Enum(
    "pending", "confirmed", "cancelled", "completed", name="booking_status"
)
menu_category = sa.Enum(
    "breakfast", "coffee", "dessert", "beverage", name="menu_category"
)


def upgrade() -> None:
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("customer_name", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("booking_time", sa.Time(), nullable=False),
        sa.Column("number_of_people", sa.Integer(), nullable=False),
        sa.Column("special_requests", sa.Text(), nullable=True),
        sa.Column("status", booking_status, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_date_time", "bookings", ["booking_date", "booking_time"], unique=False
    )
    op.create_index("idx_status", "bookings", ["status"], unique=False)

    op.create_table(
        "booking_slot_locks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("slot_date", sa.Date(), nullable=False),
        sa.Column("slot_time", sa.Time(), nullable=False),
        sa.Column("locked_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "slot_date", "slot_time", name="uq_booking_slot_locks_slot"
        ),
    )

    op.create_table(
        "menu_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("category", menu_category, nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=True),
        sa.Column("is_recommended", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("idx_category", "menu_items", ["category"], unique=False)
    op.create_index("idx_available", "menu_items", ["is_available"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_available", table_name="menu_items")
    op.drop_index("idx_category", table_name="menu_items")
    op.drop_table("menu_items")
    op.drop_table("booking_slot_locks")
    op.drop_index("idx_status", table_name="bookings")
    op.drop_index("idx_date_time", table_name="bookings")
    op.drop_table("bookings")
    menu_category.drop(op.get_bind(), checkfirst=True)
    booking_status.drop(op.get_bind(), checkfirst=True)
