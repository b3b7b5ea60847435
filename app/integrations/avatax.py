"""
AvaTax REST connectivity client.
"""
import asyncio
from typing import Any, Dict, Optional

import aiohttp

from app.config import (
    AVATAX_CLIENT_HEADER,
    AVATAX_PING_PATH,
    AVATAX_PING_TIMEOUT,
    AVATAX_PRODUCTION_URL,
    AVATAX_SANDBOX_URL,
)
from app.exceptions import AvaTaxConnectionError
from app.integrations.base import ConnectivityClient
from app.services.avatax_config import AvaTaxConfig
from app.services.scope_resolver import Scope
from app.utils import get_logger

logger = get_logger(__name__)


def _ensure_no_running_loop() -> None:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return
    raise RuntimeError(
        "AvaTaxRestClient.ping blocks until the request completes and cannot be called "
        "from a running event loop; call it from a sync endpoint or a worker thread"
    )

class AvaTaxRestClient(ConnectivityClient):
    """Pings AvaTax with the credentials configured for a mode and scope.

    ``ping`` is blocking: it drives the aiohttp request with ``asyncio.run``,
    so call it from synchronous code (FastAPI runs sync endpoints in a
    worker thread).
    """

    def __init__(self, config: AvaTaxConfig, *, timeout: Optional[float] = None):
        self.config = config
        self.timeout = AVATAX_PING_TIMEOUT if timeout is None else timeout

    @staticmethod
    def base_url(is_production: bool) -> str:
        return AVATAX_PRODUCTION_URL if is_production else AVATAX_SANDBOX_URL

    def ping(self, is_production: bool, scope: Scope) -> bool:
        _ensure_no_running_loop()
        account_number, license_key, _company_code = self.config.get_credentials(scope, is_production)
        url = f"{self.base_url(is_production).rstrip('/')}{AVATAX_PING_PATH}"
        payload = asyncio.run(self._request_ping(url, account_number or "", license_key or ""))

        authenticated = bool(payload.get("authenticated"))
        logger.info(
            "AvaTax ping completed",
            url=url,
            authenticated=authenticated,
            version=payload.get("version"),
            scope_type=scope.scope_type.value,
            scope_id=scope.scope_id,
        )
        return authenticated

    async def _request_ping(self, url: str, account_number: str, license_key: str) -> Dict[str, Any]:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        auth = aiohttp.BasicAuth(account_number, license_key)
        headers = {"X-Avalara-Client": AVATAX_CLIENT_HEADER, "Accept": "application/json"}

        logger.debug("Sending AvaTax ping", url=url)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, auth=auth, headers=headers) as response:
                    if response.status != 200:
                        detail = (await response.text()).strip()[:200]
                        logger.warning(
                            "AvaTax ping returned non-200 status",
                            url=url,
                            status_code=response.status,
                        )
                        message = f"AvaTax returned HTTP {response.status}"
                        raise AvaTaxConnectionError(f"{message}: {detail}" if detail else message)
                    data = await response.json(content_type=None)
        except asyncio.TimeoutError:
            logger.error("AvaTax ping timed out", url=url, timeout=self.timeout)
            raise AvaTaxConnectionError(f"Connection to {url} timed out after {self.timeout:g}s")
        except aiohttp.ClientError as e:
            logger.error("AvaTax ping client error", url=url, error=str(e))
            raise AvaTaxConnectionError(f"Could not reach AvaTax: {e}")

        if not isinstance(data, dict):
            raise AvaTaxConnectionError("AvaTax returned an unexpected ping response")
        return data

__all__ = ["AvaTaxRestClient"]
