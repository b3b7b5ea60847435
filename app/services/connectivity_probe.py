"""Connectivity probe run when AvaTax configuration is saved.

Order of checks:
1. Module disabled at scope -> SKIPPED, nothing reported.
2. Credentials for the mode incomplete -> SKIPPED (the validator already
   added its warning).
3. Ping the service: truthy -> SUCCESS, falsy -> AUTH_FAILED, any exception
   -> ERROR carrying the exception text unchanged, even when it is empty.
"""
from __future__ import annotations

from dataclasses import dataclass

from app.integrations.base import ConnectivityClient
from app.models.db.enums import ProbeStatus
from app.services.avatax_config import AvaTaxConfig
from app.services.credential_validator import CredentialValidator
from app.services.scope_resolver import Scope
from app.utils import get_logger

logger = get_logger(__name__)

AUTHENTICATION_FAILED_MESSAGE = "Authentication failed"


@dataclass(frozen=True)
class ProbeOutcome:
    status: ProbeStatus
    message: str | None = None

    @classmethod
    def skipped(cls) -> "ProbeOutcome":
        return cls(ProbeStatus.SKIPPED)


class ConnectivityProbe:
    def __init__(
        self,
        config: AvaTaxConfig,
        credential_validator: CredentialValidator,
        client: ConnectivityClient,
    ):
        self.config = config
        self.credential_validator = credential_validator
        self.client = client

    def probe(self, scope: Scope, is_production: bool) -> ProbeOutcome:
        if not self.config.is_module_enabled(scope):
            return ProbeOutcome.skipped()
        if not self.credential_validator.has_complete_credentials(scope, is_production):
            return ProbeOutcome.skipped()

        mode = self.config.get_mode(is_production)
        try:
            result = self.client.ping(is_production, scope)
        except Exception as e:  # any fault text is shown to the admin as-is
            logger.warning(
                "AvaTax connectivity probe failed",
                mode=mode.value,
                scope_type=scope.scope_type.value,
                scope_id=scope.scope_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return ProbeOutcome(ProbeStatus.ERROR, str(e))

        if result:
            return ProbeOutcome(ProbeStatus.SUCCESS)
        logger.warning("AvaTax connectivity probe rejected credentials", mode=mode.value, scope_id=scope.scope_id)
        return ProbeOutcome(ProbeStatus.AUTH_FAILED, AUTHENTICATION_FAILED_MESSAGE)


__all__ = ["ConnectivityProbe", "ProbeOutcome", "AUTHENTICATION_FAILED_MESSAGE"]
