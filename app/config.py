"""Process settings and shipped defaults for scoped AvaTax configuration.

Environment-driven values (database, endpoints, timeouts) are module
constants. Scoped settings (credentials, mode, feature switches) live in the
config_settings table; AVATAX_CONFIG_DEFAULTS is the last step of the scope
fallback chain, the same role shipped module defaults play on the platform.
"""
from __future__ import annotations

import os
from typing import Final

# ------------------------------ Scope model ------------------------------- #
# Reserved store id for the admin/default store view.
DEFAULT_STORE_ID: Final[int] = 0
DEFAULT_WEBSITE_ID: Final[int] = 0

# ---------------------------- AvaTax endpoints ---------------------------- #
AVATAX_PRODUCTION_URL: str = os.getenv("AVATAX_PRODUCTION_URL", "https://rest.avatax.com")
AVATAX_SANDBOX_URL: str = os.getenv("AVATAX_SANDBOX_URL", "https://sandbox-rest.avatax.com")
AVATAX_PING_PATH: str = "/api/v2/utilities/ping"

# Blocking probe runs inline with the config save request
AVATAX_PING_TIMEOUT: float = float(os.getenv("AVATAX_PING_TIMEOUT", "10"))

AVATAX_CLIENT_HEADER: str = os.getenv("AVATAX_CLIENT_HEADER", "avatax-sync-backend; 1.0.0")

# --------------------------- Scoped config paths -------------------------- #
XML_PATH_ENABLED: Final[str] = "tax/avatax/enabled"
XML_PATH_LIVE_MODE: Final[str] = "tax/avatax/live_mode"
XML_PATH_PRODUCTION_ACCOUNT_NUMBER: Final[str] = "tax/avatax/production_account_number"
XML_PATH_PRODUCTION_LICENSE_KEY: Final[str] = "tax/avatax/production_license_key"
XML_PATH_PRODUCTION_COMPANY_CODE: Final[str] = "tax/avatax/production_company_code"
XML_PATH_DEVELOPMENT_ACCOUNT_NUMBER: Final[str] = "tax/avatax/development_account_number"
XML_PATH_DEVELOPMENT_LICENSE_KEY: Final[str] = "tax/avatax/development_license_key"
XML_PATH_DEVELOPMENT_COMPANY_CODE: Final[str] = "tax/avatax/development_company_code"
XML_PATH_QUEUE_SUBMISSION_ENABLED: Final[str] = "tax/avatax/queue_submission_enabled"
XML_PATH_IGNORE_NATIVE_TAX_RULES: Final[str] = "tax/avatax/ignore_native_tax_rules"

AVATAX_CONFIG_DEFAULTS: dict[str, str | None] = {
    XML_PATH_ENABLED: "0",
    XML_PATH_LIVE_MODE: "0",
    XML_PATH_PRODUCTION_ACCOUNT_NUMBER: None,
    XML_PATH_PRODUCTION_LICENSE_KEY: None,
    XML_PATH_PRODUCTION_COMPANY_CODE: None,
    XML_PATH_DEVELOPMENT_ACCOUNT_NUMBER: None,
    XML_PATH_DEVELOPMENT_LICENSE_KEY: None,
    XML_PATH_DEVELOPMENT_COMPANY_CODE: None,
    XML_PATH_QUEUE_SUBMISSION_ENABLED: "1",
    XML_PATH_IGNORE_NATIVE_TAX_RULES: "0",
}

# Values treated as "on" when a scoped setting is read as a flag
TRUTHY_FLAG_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "on"})

# ------------------------------- Admin API -------------------------------- #
# Bearer token required by config / store / queue endpoints. Unset = open (dev only).
ADMIN_API_TOKEN: str | None = os.getenv("ADMIN_API_TOKEN") or None

# -------------------------------- Logging --------------------------------- #
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: str | None = os.getenv("LOG_FILE", "logs/app.log") or None

__all__ = [
    "DEFAULT_STORE_ID",
    "DEFAULT_WEBSITE_ID",
    "AVATAX_PRODUCTION_URL",
    "AVATAX_SANDBOX_URL",
    "AVATAX_PING_PATH",
    "AVATAX_PING_TIMEOUT",
    "AVATAX_CLIENT_HEADER",
    # Scoped config
    "XML_PATH_ENABLED",
    "XML_PATH_LIVE_MODE",
    "XML_PATH_PRODUCTION_ACCOUNT_NUMBER",
    "XML_PATH_PRODUCTION_LICENSE_KEY",
    "XML_PATH_PRODUCTION_COMPANY_CODE",
    "XML_PATH_DEVELOPMENT_ACCOUNT_NUMBER",
    "XML_PATH_DEVELOPMENT_LICENSE_KEY",
    "XML_PATH_DEVELOPMENT_COMPANY_CODE",
    "XML_PATH_QUEUE_SUBMISSION_ENABLED",
    "XML_PATH_IGNORE_NATIVE_TAX_RULES",
    "AVATAX_CONFIG_DEFAULTS",
    "TRUTHY_FLAG_VALUES",
    "ADMIN_API_TOKEN",
    "LOG_LEVEL",
    "LOG_FILE",
]
