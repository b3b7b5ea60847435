from .base import ResponseBase, ErrorResponse
from .invoices import InvoiceExtension, InvoiceCreate, InvoiceUpdate, InvoiceRead
from .config import ConfigSaveEvent, ConfigSaveRequest, Notification, ScopeRead
from .queue import QueueEntryRead
from .stores import StoreCreate, StoreRead

__all__ = [
    # Base
    "ResponseBase",
    "ErrorResponse",

    # Invoices
    "InvoiceExtension",
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceRead",

    # Config
    "ConfigSaveEvent",
    "ConfigSaveRequest",
    "Notification",
    "ScopeRead",

    # Queue / stores
    "QueueEntryRead",
    "StoreCreate",
    "StoreRead",
]
