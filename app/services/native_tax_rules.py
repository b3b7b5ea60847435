"""Advisory check for platform-native tax rules that compete with AvaTax."""
from __future__ import annotations

from sqlalchemy.orm import Session

from app.models.db.tax_rules import TaxRule
from app.services.avatax_config import AvaTaxConfig
from app.utils import get_logger

logger = get_logger(__name__)


class NativeTaxRuleChecker:
    """Warn when native tax rules exist while AvaTax calculates tax.

    Rules are only legitimate as a fallback for AvaTax errors or for VAT, so
    their presence is reported as a notice rather than an error.
    """

    def __init__(self, session: Session, config: AvaTaxConfig):
        self.session = session
        self.config = config

    def check(self) -> list[str]:
        if not self.config.is_module_enabled() or self.config.is_native_tax_rules_ignored():
            return []
        count = self.session.query(TaxRule).filter(TaxRule.is_active.is_(True)).count()
        if count == 0:
            return []
        logger.info("Native tax rules present while AvaTax is enabled", rule_count=count)
        return [
            f"You have {count} native tax rule(s) configured. Please review the tax rule(s) and "
            "delete any that you do not specifically want to use. You should only have rules set up "
            "if you want to use them as backup rules in case of AvaTax errors or if you need to "
            "support VAT tax."
        ]


__all__ = ["NativeTaxRuleChecker"]
