"""Check that the credential triple for the active mode is filled in."""
from __future__ import annotations

from app.services.avatax_config import AvaTaxConfig
from app.services.notifications import NotificationBag
from app.services.scope_resolver import Scope
from app.utils import get_logger

logger = get_logger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class CredentialValidator:
    """Incomplete credentials are a reportable outcome, never an exception."""

    def __init__(self, config: AvaTaxConfig, notifications: NotificationBag):
        self.config = config
        self.notifications = notifications

    def has_complete_credentials(self, scope: Scope, is_production: bool) -> bool:
        credentials = self.config.get_credentials(scope, is_production)
        if not any(_is_blank(value) for value in credentials):
            return True

        mode = self.config.get_mode(is_production)
        self.notifications.add_warning(
            f'The AvaTax extension is set to "{mode.value}" mode, but {mode.value.lower()} credentials are incomplete.'
        )
        logger.info(
            "AvaTax credentials incomplete",
            mode=mode.value,
            scope_type=scope.scope_type.value,
            scope_id=scope.scope_id,
        )
        return False


__all__ = ["CredentialValidator"]
