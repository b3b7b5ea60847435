import pytest
from conftest import DEVELOPMENT_CREDENTIALS, PRODUCTION_CREDENTIALS
from app.models.db.enums import NotificationLevel
from app.services.credential_validator import CredentialValidator
from app.services.notifications import NotificationBag
from app.services.scope_resolver import Scope


@pytest.mark.parametrize("blank_path", sorted(PRODUCTION_CREDENTIALS))
@pytest.mark.parametrize("blank_value", [None, "", "   "])
def test_production_missing_field_warns_once(config_factory, avatax_config, blank_path, blank_value):
    values = dict(PRODUCTION_CREDENTIALS)
    values[blank_path] = blank_value
    config_factory(values)
    bag = NotificationBag()

    ok = CredentialValidator(avatax_config, bag).has_complete_credentials(Scope.default(), True)

    assert ok is False
    assert len(bag) == 1
    warning = bag.messages[0]
    assert warning.level == NotificationLevel.WARNING
    assert warning.message == (
        'The AvaTax extension is set to "Production" mode, but production credentials are incomplete.'
    )


def test_development_complete_credentials_no_warning(config_factory, avatax_config):
    config_factory(DEVELOPMENT_CREDENTIALS)
    bag = NotificationBag()

    ok = CredentialValidator(avatax_config, bag).has_complete_credentials(Scope.default(), False)

    assert ok is True
    assert len(bag) == 0


def test_checks_only_the_requested_mode(config_factory, avatax_config):
    # Production filled, development empty
    config_factory(PRODUCTION_CREDENTIALS)
    bag = NotificationBag()
    validator = CredentialValidator(avatax_config, bag)

    assert validator.has_complete_credentials(Scope.default(), True) is True
    assert validator.has_complete_credentials(Scope.default(), False) is False
    assert [m.message for m in bag.by_level(NotificationLevel.WARNING)] == [
        'The AvaTax extension is set to "Development" mode, but development credentials are incomplete.'
    ]
