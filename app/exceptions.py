"""Typed exceptions raised by the AvaTax sync services.

Every exception carries a machine-readable ``code`` so API handlers and
callers can branch on type instead of parsing messages.

    AvaTaxError (base)
    +-- CouldNotSaveError      COULD_NOT_SAVE     queue entry could not be persisted
    +-- NoSuchEntityError      NO_SUCH_ENTITY     document lookup matched nothing
    +-- AvaTaxConnectionError  CONNECTION_ERROR   ping to AvaTax failed
"""
from __future__ import annotations


class AvaTaxError(Exception):
    code: str = "AVATAX_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CouldNotSaveError(AvaTaxError):
    code = "COULD_NOT_SAVE"


class NoSuchEntityError(AvaTaxError):
    code = "NO_SUCH_ENTITY"

    def __init__(self, entity: str, field: str, value: object):
        super().__init__(f"No such {entity} with {field} = {value}")
        self.entity = entity
        self.field = field
        self.value = value


class AvaTaxConnectionError(AvaTaxError):
    """Raised by connectivity clients; the message is shown to admins verbatim."""

    code = "CONNECTION_ERROR"


__all__ = [
    "AvaTaxError",
    "CouldNotSaveError",
    "NoSuchEntityError",
    "AvaTaxConnectionError",
]
