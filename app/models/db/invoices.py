from __future__ import annotations
"""SQLAlchemy model for invoices plus their AvaTax reconciliation columns.

The two avatax_* columns are nullable. NULL means the value was never
computed and must stay distinguishable from False / 0.
"""
from decimal import Decimal
from sqlalchemy import Integer, String, DateTime, Numeric, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from app.database import Base

class Invoice(Base):
    __tablename__ = "invoices"
    entity_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    increment_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    store_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    order_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    grand_total: Mapped[Decimal] = mapped_column(Numeric(20, 4), default=Decimal("0"))
    base_tax_amount: Mapped[Decimal] = mapped_column(Numeric(20, 4), default=Decimal("0"))

    avatax_is_unbalanced: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    base_avatax_tax_amount: Mapped[Decimal | None] = mapped_column(Numeric(20, 4), nullable=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Transient extension channel (InvoiceExtension), never mapped to a column.
    # Populated by the persistence hooks on load and read by them on save.
    extension_attributes = None
