"""AvaTax hooks around invoice save and load.

``PersistenceInterceptor`` wraps an underlying store's ``save`` / ``load``
passed in as callables, so the store itself stays unaware of AvaTax.

Around save:
  * Newness is captured before delegating; after the store assigns an
    identity the invoice no longer looks new.
  * With the module enabled, extension values that are set (not None) are
    copied onto the avatax_* columns. Unset extension values leave the
    columns alone.
  * When an extension value is set and differs from the value last loaded
    from the database (including NULL -> value), ``updated_at`` is bumped so
    the row is written with fresh metadata even for False / 0 values.
  * After the save, a newly created invoice gets exactly one PENDING queue
    entry when both the module and queue submission are enabled. Updates
    never enqueue. Queue failures propagate as ``CouldNotSaveError``.

Around load:
  * With the module enabled, non-NULL avatax_* columns are copied into the
    invoice's extension channel. NULL columns stay unset, never defaulted.

The queue insert commits separately from the invoice save. A crash between
the two leaves an invoice without a queue entry.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.config import DEFAULT_STORE_ID
from app.models.db.enums import EntityTypeCode, QueueStatus
from app.models.db.invoices import Invoice
from app.models.schemas.invoices import InvoiceExtension
from app.services.avatax_config import AvaTaxConfig
from app.services.invoice_resource import InvoiceResource
from app.services.scope_resolver import Scope
from app.services.submission_queue import SubmissionQueue
from app.utils import get_logger, log_business_event, utc_now

logger = get_logger(__name__)

RECONCILIATION_FIELDS = ("avatax_is_unbalanced", "base_avatax_tax_amount")

SaveCallable = Callable[[Invoice], Invoice]
LoadCallable = Callable[[Any, Optional[str]], Invoice]


def is_object_new(entity: Invoice) -> bool:
    """True until the instance has a persistent identity."""
    return not inspect(entity).has_identity


def original_value(entity: Invoice, key: str) -> Any:
    """Value of ``key`` as last loaded from the database, None if never persisted."""
    state = inspect(entity)
    if not state.has_identity:
        return None
    history = state.attrs[key].load_history()
    if history.deleted:
        return history.deleted[0]
    if history.unchanged:
        return history.unchanged[0]
    return None


def _differs_from_original(new_value: Any, orig_value: Any) -> bool:
    # NULL -> False / 0 counts as a change
    return new_value is not None and (orig_value is None or new_value != orig_value)


def _store_scope(entity: Invoice) -> Scope:
    store_id = entity.store_id if entity.store_id is not None else DEFAULT_STORE_ID
    return Scope.for_store(store_id)


class PersistenceInterceptor:
    def __init__(
        self,
        config: AvaTaxConfig,
        queue: SubmissionQueue,
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self.queue = queue
        self.clock = clock

    def around_save(self, proceed: SaveCallable, entity: Invoice) -> Invoice:
        was_new = is_object_new(entity)
        scope = _store_scope(entity)
        module_enabled = self.config.is_module_enabled(scope)

        if module_enabled:
            self._write_extension_to_columns(entity)

        result = proceed(entity)

        if module_enabled and was_new and self.config.get_queue_submission_enabled(scope):
            self._enqueue(entity)

        return result

    def around_load(self, proceed: LoadCallable, value: Any, field: Optional[str] = None) -> Invoice:
        entity = proceed(value, field)

        if self.config.is_module_enabled(_store_scope(entity)):
            stored = InvoiceExtension(
                avatax_is_unbalanced=entity.avatax_is_unbalanced,
                base_avatax_tax_amount=entity.base_avatax_tax_amount,
            )
            if stored.has_values():
                extension = entity.extension_attributes or InvoiceExtension()
                for key in RECONCILIATION_FIELDS:
                    stored_value = getattr(stored, key)
                    if stored_value is not None:
                        setattr(extension, key, stored_value)
                entity.extension_attributes = extension

        return entity

    def _write_extension_to_columns(self, entity: Invoice) -> None:
        extension: InvoiceExtension | None = entity.extension_attributes
        if extension is None or not extension.has_values():
            return

        originals = {key: original_value(entity, key) for key in RECONCILIATION_FIELDS}
        changed = False
        for key in RECONCILIATION_FIELDS:
            new_value = getattr(extension, key)
            if new_value is None:
                continue
            setattr(entity, key, new_value)
            changed = changed or _differs_from_original(new_value, originals[key])

        if changed:
            entity.updated_at = self.clock()

    def _enqueue(self, entity: Invoice) -> None:
        entry = self.queue.create()
        entry.build(
            entity.store_id,
            EntityTypeCode.INVOICE,
            entity.entity_id,
            entity.increment_id,
            QueueStatus.PENDING,
        )
        self.queue.save(entry)

        logger.debug(
            "Added entity to the queue",
            queue_id=entry.id,
            entity_type_code=EntityTypeCode.INVOICE.value,
            entity_id=entity.entity_id,
            increment_id=entity.increment_id,
        )
        log_business_event(
            event_type="invoice_enqueued",
            details={
                "queue_id": entry.id,
                "store_id": entity.store_id,
                "entity_id": entity.entity_id,
                "increment_id": entity.increment_id,
            },
        )


class InterceptedInvoiceResource:
    """Invoice store with the AvaTax hooks applied. Application code uses this one."""

    def __init__(
        self,
        session: Session,
        *,
        resource: InvoiceResource | None = None,
        interceptor: PersistenceInterceptor | None = None,
    ):
        self.resource = resource or InvoiceResource(session)
        self.interceptor = interceptor or PersistenceInterceptor(AvaTaxConfig(session), SubmissionQueue(session))

    def save(self, invoice: Invoice) -> Invoice:
        return self.interceptor.around_save(self.resource.save, invoice)

    def load(self, value: Any, field: Optional[str] = None) -> Invoice:
        return self.interceptor.around_load(self.resource.load, value, field)


__all__ = [
    "PersistenceInterceptor",
    "InterceptedInvoiceResource",
    "is_object_new",
    "original_value",
    "RECONCILIATION_FIELDS",
]
