"""Plain invoice persistence: add/commit on save, query on load.

Knows nothing about AvaTax. ``InterceptedInvoiceResource`` in
``invoice_persistence`` wraps it with the AvaTax hooks.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.exceptions import NoSuchEntityError
from app.models.db.invoices import Invoice

_LOADABLE_FIELDS = {"entity_id", "increment_id"}


class InvoiceResource:
    def __init__(self, session: Session):
        self.session = session

    def save(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        self.session.commit()
        self.session.refresh(invoice)
        return invoice

    def load(self, value: Any, field: str | None = None) -> Invoice:
        field = field or "entity_id"
        if field not in _LOADABLE_FIELDS:
            raise ValueError(f"Cannot load invoice by '{field}'")
        invoice = (
            self.session.query(Invoice)
            .filter(getattr(Invoice, field) == value)
            .one_or_none()
        )
        if invoice is None:
            raise NoSuchEntityError("invoice", field, value)
        return invoice


__all__ = ["InvoiceResource"]
