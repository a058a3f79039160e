"""Machine-to-machine token acquisition (client credentials)."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from legacy_processor.config.http_resilience import ResilienceConfig

from .client import ServiceClient
from .schema import TokenResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from legacy_processor.config.services import AuthConfig

    from .client import ClientFactory

log = getLogger(__name__)

# refresh a little before the issuer's expiry
_EXPIRY_MARGIN_SECONDS = 60.0


@dataclass(slots=True)
class M2MTokenProvider:
    config: AuthConfig
    client_factory: ClientFactory | None = None
    clock: Callable[[], float] = time.monotonic
    _token: str | None = field(default=None, init=False)
    _expires_at: float = field(default=0.0, init=False)

    def __call__(self) -> str:
        if self._token is not None and self.clock() < self._expires_at:
            return self._token
        token = self._fetch_token()
        lifetime = float(token.expires_in or self.config.token_cache_seconds)
        lifetime = min(lifetime, float(self.config.token_cache_seconds))
        self._token = token.access_token
        self._expires_at = self.clock() + max(lifetime - _EXPIRY_MARGIN_SECONDS, 0.0)
        return self._token

    def _fetch_token(self) -> TokenResponse:
        body: dict[str, str] = {
            "grant_type": "client_credentials",
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "audience": self.config.audience,
        }
        url = self.config.auth_url
        if self.config.proxy_url:
            # the proxy forwards to the issuer named in the body
            body["auth0_url"] = self.config.auth_url
            url = self.config.proxy_url

        log.debug("Requesting machine-to-machine token from %s", url)
        with ServiceClient(
            resilience=ResilienceConfig(name="auth0"),
            client_factory=self.client_factory,
        ) as client:
            return TokenResponse.model_validate(client.post(url, json=body))
