"""users, customers, invoices and invoice rows

Revision ID: 20240301_0001
Revises:
Create Date: 2024-03-01 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20240301_0001"
down_revision = None
branch_labels = None
depends_on = None


customer_status_enum = sa.Enum("Active", "Inactive", "Suspended", name="customer_status", native_enum=False)
invoice_status_enum = sa.Enum(
    "Created", "Sent", "Received", "Paid", "Cancelled", "Rejected", name="invoice_status", native_enum=False
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("address", sa.String(length=200), nullable=True),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("address", sa.String(length=200), nullable=True),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=True),
        sa.Column("status", customer_status_enum, server_default="Active", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sqlite_autoincrement=True,
    )
    op.create_index("customers_name_idx", "customers", ["name"], unique=False)

    op.create_table(
        "user_customer_relations",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "customer_id"),
    )
    op.create_index(
        "user_customer_relations_customer_idx",
        "user_customer_relations",
        ["customer_id"],
        unique=False,
    )

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("total_sum", sa.Numeric(26, 5), nullable=False),
        sa.Column("comment", sa.String(length=500), nullable=True),
        sa.Column("status", invoice_status_enum, server_default="Created", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("invoices_customer_id_idx", "invoices", ["customer_id"], unique=False)
    op.create_index("invoices_status_idx", "invoices", ["status"], unique=False)

    op.create_table(
        "invoice_rows",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("invoice_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("service", sa.String(length=50), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("sum", sa.Numeric(24, 5), nullable=False),
        sa.ForeignKeyConstraint(["invoice_id"], ["invoices.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("invoice_rows_invoice_id_idx", "invoice_rows", ["invoice_id"], unique=False)


def downgrade() -> None:
    op.drop_index("invoice_rows_invoice_id_idx", table_name="invoice_rows")
    op.drop_table("invoice_rows")

    op.drop_index("invoices_status_idx", table_name="invoices")
    op.drop_index("invoices_customer_id_idx", table_name="invoices")
    op.drop_table("invoices")

    op.drop_index("user_customer_relations_customer_idx", table_name="user_customer_relations")
    op.drop_table("user_customer_relations")

    op.drop_index("customers_name_idx", table_name="customers")
    op.drop_table("customers")

    op.drop_table("users")
