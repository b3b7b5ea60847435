"""
Invoice endpoints.

Every save and load goes through the intercepted invoice resource, so the
AvaTax reconciliation fields and queue submission behave exactly as they do
for any other caller of the persistence layer.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import time
from app.api.deps import get_db, get_invoice_resource
from app.models.db import Invoice
from app.models.schemas.invoices import InvoiceCreate, InvoiceUpdate, InvoiceRead
from app.services.invoice_persistence import InterceptedInvoiceResource
from app.utils import get_logger, log_business_event, log_performance

router = APIRouter()
logger = get_logger(__name__)

@router.post(
    "/",
    response_model=InvoiceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an invoice"
)
async def create_invoice(
    payload: InvoiceCreate,
    request: Request,
    db: Session = Depends(get_db),
    invoices: InterceptedInvoiceResource = Depends(get_invoice_resource)
) -> InvoiceRead:
    """
    Create an invoice. With AvaTax enabled for the invoice's store, the new
    invoice is also placed on the submission queue.
    """
    start_time = time.time()
    request_id = request.headers.get("X-Request-ID", "unknown")

    logger.info(
        "Invoice creation requested",
        increment_id=payload.increment_id,
        store_id=payload.store_id,
        request_id=request_id
    )

    if db.query(Invoice).filter(Invoice.increment_id == payload.increment_id).first():
        logger.warning(
            "Invoice creation failed: duplicate increment id",
            increment_id=payload.increment_id,
            request_id=request_id
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Invoice '{payload.increment_id}' already exists"
        )

    invoice = Invoice(
        increment_id=payload.increment_id,
        store_id=payload.store_id,
        order_id=payload.order_id,
        grand_total=payload.grand_total,
        base_tax_amount=payload.base_tax_amount
    )
    invoice.extension_attributes = payload.extension_attributes
    try:
        invoice = invoices.save(invoice)
    except IntegrityError as ie:
        # A concurrent create with the same increment id won the insert
        db.rollback()
        logger.warning(
            "Invoice creation integrity error",
            increment_id=payload.increment_id,
            error=str(ie),
            request_id=request_id
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Invoice '{payload.increment_id}' already exists"
        )

    log_business_event(
        event_type="invoice_created",
        details={
            "entity_id": invoice.entity_id,
            "increment_id": invoice.increment_id,
            "store_id": invoice.store_id
        },
        request_id=request_id
    )

    duration_ms = (time.time() - start_time) * 1000
    log_performance(operation="create_invoice", duration_ms=duration_ms)

    return InvoiceRead.model_validate(invoice)

@router.put(
    "/{entity_id}",
    response_model=InvoiceRead,
    summary="Update an invoice"
)
async def update_invoice(
    entity_id: int,
    payload: InvoiceUpdate,
    request: Request,
    invoices: InterceptedInvoiceResource = Depends(get_invoice_resource)
) -> InvoiceRead:
    """Update totals and/or reconciliation fields. Updates never enqueue."""
    request_id = request.headers.get("X-Request-ID", "unknown")

    invoice = invoices.load(entity_id)

    if payload.grand_total is not None:
        invoice.grand_total = payload.grand_total
    if payload.base_tax_amount is not None:
        invoice.base_tax_amount = payload.base_tax_amount
    if payload.extension_attributes is not None:
        invoice.extension_attributes = payload.extension_attributes

    invoice = invoices.save(invoice)

    logger.info(
        "Invoice updated",
        entity_id=invoice.entity_id,
        increment_id=invoice.increment_id,
        request_id=request_id
    )
    return InvoiceRead.model_validate(invoice)

@router.get(
    "/{entity_id}",
    response_model=InvoiceRead,
    summary="Get an invoice"
)
async def get_invoice(
    entity_id: int,
    invoices: InterceptedInvoiceResource = Depends(get_invoice_resource)
) -> InvoiceRead:
    return InvoiceRead.model_validate(invoices.load(entity_id))
