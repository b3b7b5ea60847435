"""AvaTax configuration accessor.

Typed getters over the scoped config store. Every getter takes the scope it
should resolve at; omitting it means the default store scope.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from app.config import (
    XML_PATH_DEVELOPMENT_ACCOUNT_NUMBER,
    XML_PATH_DEVELOPMENT_COMPANY_CODE,
    XML_PATH_DEVELOPMENT_LICENSE_KEY,
    XML_PATH_ENABLED,
    XML_PATH_IGNORE_NATIVE_TAX_RULES,
    XML_PATH_LIVE_MODE,
    XML_PATH_PRODUCTION_ACCOUNT_NUMBER,
    XML_PATH_PRODUCTION_COMPANY_CODE,
    XML_PATH_PRODUCTION_LICENSE_KEY,
    XML_PATH_QUEUE_SUBMISSION_ENABLED,
)
from app.models.db.enums import OperatingMode
from app.services.scope_config import ScopeConfigReader
from app.services.scope_resolver import Scope


class AvaTaxConfig:
    def __init__(self, session: Session, reader: ScopeConfigReader | None = None):
        self.reader = reader or ScopeConfigReader(session)

    def is_module_enabled(self, scope: Scope | None = None) -> bool:
        return self.reader.is_set_flag(XML_PATH_ENABLED, scope)

    def is_production_mode(self, scope: Scope | None = None) -> bool:
        return self.reader.is_set_flag(XML_PATH_LIVE_MODE, scope)

    @staticmethod
    def get_mode(is_production: bool) -> OperatingMode:
        return OperatingMode.PRODUCTION if is_production else OperatingMode.DEVELOPMENT

    # Production credentials
    def get_account_number(self, scope: Scope | None = None) -> str | None:
        return self.reader.get_value(XML_PATH_PRODUCTION_ACCOUNT_NUMBER, scope)

    def get_license_key(self, scope: Scope | None = None) -> str | None:
        return self.reader.get_value(XML_PATH_PRODUCTION_LICENSE_KEY, scope)

    def get_company_code(self, scope: Scope | None = None) -> str | None:
        return self.reader.get_value(XML_PATH_PRODUCTION_COMPANY_CODE, scope)

    # Development (sandbox) credentials
    def get_development_account_number(self, scope: Scope | None = None) -> str | None:
        return self.reader.get_value(XML_PATH_DEVELOPMENT_ACCOUNT_NUMBER, scope)

    def get_development_license_key(self, scope: Scope | None = None) -> str | None:
        return self.reader.get_value(XML_PATH_DEVELOPMENT_LICENSE_KEY, scope)

    def get_development_company_code(self, scope: Scope | None = None) -> str | None:
        return self.reader.get_value(XML_PATH_DEVELOPMENT_COMPANY_CODE, scope)

    def get_credentials(self, scope: Scope | None, is_production: bool) -> tuple[str | None, str | None, str | None]:
        """(account number, license key, company code) for the given mode."""
        if is_production:
            return (
                self.get_account_number(scope),
                self.get_license_key(scope),
                self.get_company_code(scope),
            )
        return (
            self.get_development_account_number(scope),
            self.get_development_license_key(scope),
            self.get_development_company_code(scope),
        )

    def get_queue_submission_enabled(self, scope: Scope | None = None) -> bool:
        return self.reader.is_set_flag(XML_PATH_QUEUE_SUBMISSION_ENABLED, scope)

    def is_native_tax_rules_ignored(self, scope: Scope | None = None) -> bool:
        return self.reader.is_set_flag(XML_PATH_IGNORE_NATIVE_TAX_RULES, scope)


__all__ = ["AvaTaxConfig"]
