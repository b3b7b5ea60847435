from .stores import Store
from .config_settings import ConfigSetting
from .tax_rules import TaxRule
from .invoices import Invoice
from .queue import QueueEntry
from .enums import (
    ScopeType,
    ConfigScopeCode,
    OperatingMode,
    EntityTypeCode,
    QueueStatus,
    ProbeStatus,
    NotificationLevel,
)

__all__ = [
    "Store",
    "ConfigSetting",
    "TaxRule",
    "Invoice",
    "QueueEntry",
    "ScopeType",
    "ConfigScopeCode",
    "OperatingMode",
    "EntityTypeCode",
    "QueueStatus",
    "ProbeStatus",
    "NotificationLevel",
]
