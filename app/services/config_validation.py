"""Configuration-save validation.

``ConfigValidationCoordinator.on_config_saved(event)`` runs synchronously
after AvaTax settings are written:

1. Resolve the event's scope (store > website > default).
2. Read the live/sandbox flag at that scope to pick the credential mode.
3. Probe connectivity (credential warnings are added by the validator).
4. Turn the probe outcome into a success or error notification. A fault
   whose text is empty produces no error notification.
5. Always run the native tax-rule check and add its notices.

Nothing here raises: every failure path ends as a message, and the config
write that triggered the event has already been committed.

Returned order: anything added during the probe (credential warning, success),
then probe errors, then advisory notices.
"""
from __future__ import annotations

from typing import Protocol

from app.integrations.base import ConnectivityClient
from app.models.db.enums import OperatingMode, ProbeStatus
from app.models.schemas.config import ConfigSaveEvent, Notification
from app.services.avatax_config import AvaTaxConfig
from app.services.connectivity_probe import ConnectivityProbe, ProbeOutcome
from app.services.credential_validator import CredentialValidator
from app.services.notifications import NotificationBag
from app.services.scope_resolver import Scope, resolve_scope
from app.utils import get_logger

logger = get_logger(__name__)


class TaxRuleChecker(Protocol):
    def check(self) -> list[str]: ...


def _probe_errors(outcome: ProbeOutcome, mode: OperatingMode) -> list[str]:
    # A fault with no text is not reported
    if outcome.status in (ProbeStatus.AUTH_FAILED, ProbeStatus.ERROR) and outcome.message:
        return [f"Error connecting to AvaTax using the {mode.value} credentials: {outcome.message}"]
    return []


class ConfigValidationCoordinator:
    def __init__(
        self,
        config: AvaTaxConfig,
        client: ConnectivityClient,
        tax_rule_checker: TaxRuleChecker,
    ):
        self.config = config
        self.client = client
        self.tax_rule_checker = tax_rule_checker

    def on_config_saved(self, event: ConfigSaveEvent) -> list[Notification]:
        scope = resolve_scope(event)
        notifications = NotificationBag()

        for error in self._get_errors(scope, notifications):
            notifications.add_error(error)

        for notice in self._get_notices():
            notifications.add_notice(notice)

        logger.info(
            "Config save validated",
            scope_type=scope.scope_type.value,
            scope_id=scope.scope_id,
            notification_count=len(notifications),
        )
        return notifications.messages

    def _get_errors(self, scope: Scope, notifications: NotificationBag) -> list[str]:
        is_production = self.config.is_production_mode(scope)
        mode = self.config.get_mode(is_production)

        probe = ConnectivityProbe(
            self.config,
            CredentialValidator(self.config, notifications),
            self.client,
        )
        outcome = probe.probe(scope, is_production)
        if outcome.status == ProbeStatus.SUCCESS:
            notifications.add_success(f"Successfully connected to AvaTax using the {mode.value} credentials")
        return _probe_errors(outcome, mode)

    def _get_notices(self) -> list[str]:
        return list(self.tax_rule_checker.check())


__all__ = ["ConfigValidationCoordinator", "TaxRuleChecker"]
