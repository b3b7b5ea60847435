from app.config import (
    XML_PATH_ENABLED,
    XML_PATH_LIVE_MODE,
    XML_PATH_QUEUE_SUBMISSION_ENABLED,
    XML_PATH_PRODUCTION_ACCOUNT_NUMBER,
)
from app.models.db import ConfigSetting
from app.models.db.enums import ConfigScopeCode, OperatingMode, ScopeType
from app.services.avatax_config import AvaTaxConfig
from app.services.scope_config import ScopeConfigReader
from app.services.scope_resolver import Scope


def test_shipped_defaults_apply_when_nothing_stored(db_session, avatax_config):
    assert avatax_config.is_module_enabled() is False
    assert avatax_config.is_production_mode() is False
    assert avatax_config.get_queue_submission_enabled() is True
    assert avatax_config.get_account_number() is None


def test_store_falls_back_to_website_then_default(db_session, config_factory, store_factory):
    store_factory(2, website_id=9)
    config_factory({XML_PATH_PRODUCTION_ACCOUNT_NUMBER: "default-acct", XML_PATH_LIVE_MODE: "0"})
    config_factory({XML_PATH_PRODUCTION_ACCOUNT_NUMBER: "website-acct"}, ConfigScopeCode.WEBSITES, 9)
    reader = ScopeConfigReader(db_session)

    store_scope = Scope.for_store(2)
    assert reader.get_value(XML_PATH_PRODUCTION_ACCOUNT_NUMBER, store_scope) == "website-acct"
    assert reader.get_value(XML_PATH_LIVE_MODE, store_scope) == "0"

    config_factory({XML_PATH_PRODUCTION_ACCOUNT_NUMBER: "store-acct"}, ConfigScopeCode.STORES, 2)
    assert reader.get_value(XML_PATH_PRODUCTION_ACCOUNT_NUMBER, store_scope) == "store-acct"
    assert reader.get_value(XML_PATH_PRODUCTION_ACCOUNT_NUMBER) == "default-acct"


def test_website_scope_skips_store_level(db_session, config_factory):
    config_factory({XML_PATH_ENABLED: "1"}, ConfigScopeCode.WEBSITES, 3)
    config = AvaTaxConfig(db_session)
    assert config.is_module_enabled(Scope(ScopeType.WEBSITE, 3)) is True
    assert config.is_module_enabled(Scope(ScopeType.WEBSITE, 4)) is False


def test_stored_null_stops_fallback(db_session, config_factory, store_factory):
    store_factory(2, website_id=1)
    config_factory({XML_PATH_PRODUCTION_ACCOUNT_NUMBER: "default-acct"})
    config_factory({XML_PATH_PRODUCTION_ACCOUNT_NUMBER: None}, ConfigScopeCode.STORES, 2)

    config = AvaTaxConfig(db_session)
    assert config.get_account_number(Scope.for_store(2)) is None
    assert config.get_account_number() == "default-acct"


def test_flag_values_are_lenient(db_session, config_factory):
    config = AvaTaxConfig(db_session)
    for raw, expected in [("1", True), ("true", True), (" Yes ", True), ("0", False), ("", False), ("no", False)]:
        config_factory({XML_PATH_QUEUE_SUBMISSION_ENABLED: raw})
        assert config.get_queue_submission_enabled() is expected, raw


def test_writer_upserts_single_row(db_session, config_factory):
    config_factory({XML_PATH_ENABLED: "1"})
    config_factory({XML_PATH_ENABLED: "0"})
    rows = db_session.query(ConfigSetting).filter(ConfigSetting.path == XML_PATH_ENABLED).all()
    assert len(rows) == 1
    assert rows[0].value == "0"


def test_default_scope_write_ignores_scope_id(db_session, config_factory):
    config_factory({XML_PATH_ENABLED: "1"}, ConfigScopeCode.DEFAULT, 42)
    row = db_session.query(ConfigSetting).one()
    assert row.scope == ConfigScopeCode.DEFAULT
    assert row.scope_id == 0


def test_mode_follows_production_flag():
    assert AvaTaxConfig.get_mode(True) is OperatingMode.PRODUCTION
    assert AvaTaxConfig.get_mode(False) is OperatingMode.DEVELOPMENT
    assert OperatingMode.DEVELOPMENT.value == "Development"
