"""Central Enum definitions for scope, mode, queue and notification states.

These replace scattered string literals so DB models, schemas and service
logic agree on the same values.
"""
from __future__ import annotations
import enum


class ScopeType(str, enum.Enum):
    STORE = "store"
    WEBSITE = "website"
    DEFAULT = "default"


class ConfigScopeCode(str, enum.Enum):
    """Scope column values used by config_settings rows."""
    DEFAULT = "default"
    WEBSITES = "websites"
    STORES = "stores"


class OperatingMode(str, enum.Enum):
    PRODUCTION = "Production"
    DEVELOPMENT = "Development"

# ------------------------------ Queue Enums ------------------------------- #

class EntityTypeCode(str, enum.Enum):
    INVOICE = "invoice"
    CREDITMEMO = "creditmemo"


class QueueStatus(str, enum.Enum):
    # The persistence hooks only write PENDING
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETE = "complete"
    FAILED = "failed"

# --------------------------- Config save results -------------------------- #

class ProbeStatus(str, enum.Enum):
    SKIPPED = "SKIPPED"
    SUCCESS = "SUCCESS"
    AUTH_FAILED = "AUTH_FAILED"
    ERROR = "ERROR"


class NotificationLevel(str, enum.Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"
    SUCCESS = "success"

__all__ = [
    "ScopeType",
    "ConfigScopeCode",
    "OperatingMode",
    "EntityTypeCode",
    "QueueStatus",
    "ProbeStatus",
    "NotificationLevel",
]
