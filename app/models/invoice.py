from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.models.enums import InvoiceStatus


class Invoice(Base):
    """Invoice issued to a customer for a billing period."""

    __tablename__ = "invoices"
    __table_args__ = (
        Index("invoices_customer_id_idx", "customer_id"),
        Index("invoices_status_idx", "status"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    total_sum: Mapped[Decimal] = mapped_column(Numeric(26, 5), nullable=False, default=Decimal("0"))
    comment: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[InvoiceStatus] = mapped_column(
        Enum(InvoiceStatus, name="invoice_status", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=InvoiceStatus.CREATED,
        server_default=InvoiceStatus.CREATED.value,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    customer = relationship("Customer", back_populates="invoices")
    rows = relationship(
        "InvoiceRow",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceRow.position",
    )
