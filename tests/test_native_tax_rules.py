from app.config import XML_PATH_ENABLED, XML_PATH_IGNORE_NATIVE_TAX_RULES
from app.services.native_tax_rules import NativeTaxRuleChecker


def test_no_notice_without_active_rules(enabled_module, db_session, avatax_config, tax_rule_factory):
    tax_rule_factory(is_active=False)
    assert NativeTaxRuleChecker(db_session, avatax_config).check() == []


def test_notice_counts_active_rules(enabled_module, db_session, avatax_config, tax_rule_factory):
    for _ in range(3):
        tax_rule_factory()
    notices = NativeTaxRuleChecker(db_session, avatax_config).check()
    assert len(notices) == 1
    assert notices[0].startswith("You have 3 native tax rule(s) configured.")
    assert "VAT" in notices[0]


def test_silent_when_module_disabled(config_factory, db_session, avatax_config, tax_rule_factory):
    config_factory({XML_PATH_ENABLED: "0"})
    tax_rule_factory()
    assert NativeTaxRuleChecker(db_session, avatax_config).check() == []


def test_silent_when_rules_ignored(enabled_module, config_factory, db_session, avatax_config, tax_rule_factory):
    config_factory({XML_PATH_IGNORE_NATIVE_TAX_RULES: "1"})
    tax_rule_factory()
    assert NativeTaxRuleChecker(db_session, avatax_config).check() == []
