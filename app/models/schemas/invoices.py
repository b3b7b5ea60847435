"""
Pydantic schemas for invoices and their AvaTax extension channel.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

class InvoiceExtension(BaseModel):
    """Reconciliation fields carried beside an invoice during one load/save cycle.

    ``None`` means absent (never computed). ``False`` and ``0`` are explicit
    values and are persisted as such.
    """
    avatax_is_unbalanced: Optional[bool] = Field(None, description="Whether AvaTax tax differs from platform tax")
    base_avatax_tax_amount: Optional[Decimal] = Field(None, description="Tax amount calculated by AvaTax (base currency)")

    def has_values(self) -> bool:
        return self.avatax_is_unbalanced is not None or self.base_avatax_tax_amount is not None

class InvoiceCreate(BaseModel):
    increment_id: str = Field(min_length=1, max_length=50)
    store_id: int = Field(0, ge=0)
    order_id: Optional[int] = None
    grand_total: Decimal = Field(Decimal("0"))
    base_tax_amount: Decimal = Field(Decimal("0"))
    extension_attributes: Optional[InvoiceExtension] = None

class InvoiceUpdate(BaseModel):
    grand_total: Optional[Decimal] = None
    base_tax_amount: Optional[Decimal] = None
    extension_attributes: Optional[InvoiceExtension] = None

class InvoiceRead(BaseModel):
    entity_id: int
    increment_id: str
    store_id: int
    order_id: Optional[int]
    grand_total: Decimal
    base_tax_amount: Decimal
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    extension_attributes: Optional[InvoiceExtension] = None

    model_config = ConfigDict(from_attributes=True)
