import asyncio
import pytest
from conftest import DEVELOPMENT_CREDENTIALS, PRODUCTION_CREDENTIALS
from app.config import AVATAX_PING_PATH, AVATAX_PRODUCTION_URL, AVATAX_SANDBOX_URL
from app.exceptions import AvaTaxConnectionError
from app.integrations.avatax import AvaTaxRestClient
from app.services.scope_resolver import Scope


@pytest.fixture()
def captured(monkeypatch):
    calls = []
    responses = {"payload": {"version": "22.1.0", "authenticated": True}}

    async def fake_request_ping(self, url, account_number, license_key):
        calls.append((url, account_number, license_key))
        return responses["payload"]

    monkeypatch.setattr(AvaTaxRestClient, "_request_ping", fake_request_ping)
    return calls, responses


def test_base_url_follows_mode():
    assert AvaTaxRestClient.base_url(True) == AVATAX_PRODUCTION_URL
    assert AvaTaxRestClient.base_url(False) == AVATAX_SANDBOX_URL


def test_ping_uses_mode_credentials(config_factory, avatax_config, captured):
    calls, _ = captured
    config_factory({**DEVELOPMENT_CREDENTIALS, **PRODUCTION_CREDENTIALS})
    client = AvaTaxRestClient(avatax_config)

    assert client.ping(False, Scope.default()) is True
    assert client.ping(True, Scope.default()) is True

    assert calls[0] == (f"{AVATAX_SANDBOX_URL}{AVATAX_PING_PATH}", "2000123456", "DEVLICENSEKEY")
    assert calls[1] == (f"{AVATAX_PRODUCTION_URL}{AVATAX_PING_PATH}", "1100123456", "PRODLICENSEKEY")


def test_unauthenticated_ping_returns_false(config_factory, avatax_config, captured):
    _, responses = captured
    config_factory(DEVELOPMENT_CREDENTIALS)
    responses["payload"] = {"version": "22.1.0", "authenticated": False}

    assert AvaTaxRestClient(avatax_config).ping(False, Scope.default()) is False


def test_unreachable_host_raises_connection_error(config_factory, avatax_config, monkeypatch):
    config_factory(DEVELOPMENT_CREDENTIALS)
    monkeypatch.setattr("app.integrations.avatax.AVATAX_SANDBOX_URL", "http://127.0.0.1:9")
    client = AvaTaxRestClient(avatax_config, timeout=2)

    with pytest.raises(AvaTaxConnectionError) as exc:
        client.ping(False, Scope.default())
    assert exc.value.message


def test_ping_inside_running_loop_raises_clear_error(config_factory, avatax_config, captured):
    calls, _ = captured
    config_factory(DEVELOPMENT_CREDENTIALS)
    client = AvaTaxRestClient(avatax_config)

    async def call_from_loop():
        return client.ping(False, Scope.default())

    with pytest.raises(RuntimeError, match="running event loop"):
        asyncio.run(call_from_loop())
    assert calls == []
