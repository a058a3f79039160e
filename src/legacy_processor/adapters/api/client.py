"""Authenticated JSON client shared by the Topcoder API adapters."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx

from legacy_processor.adapters.http_resilience import ResilientClient
from legacy_processor.config.http_resilience import ResilienceConfig
from legacy_processor.domain.errors import AuthenticationError, NotFoundError, RemoteCallError

from .schema import ErrorResponse, V4Response

if TYPE_CHECKING:
    from types import TracebackType

log = getLogger(__name__)

TokenProvider = Callable[[], str]
ClientFactory = Callable[[ResilienceConfig], ResilientClient]


class ServiceClient:
    """Blocking JSON calls over one long-lived async client.

    The client, its rate limiter and the event loop driving them are created on
    first use and live until ``close()``. Bearer tokens are resolved before the
    loop runs, so a token provider may itself make blocking calls.
    """

    def __init__(
        self,
        *,
        resilience: ResilienceConfig,
        token_provider: TokenProvider | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._resilience = resilience
        self._token_provider = token_provider
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None

    def __enter__(self) -> ServiceClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._runner is None:
            return
        try:
            if self._client is not None:
                self._runner.run(self._client.aclose())
        finally:
            self._runner.close()
            self._runner = None
            self._client = None

    def get(self, url: str, *, params: dict[str, str] | None = None) -> Any:
        return self.request("GET", url, params=params)

    def post(
        self, url: str, *, json: object = None, params: dict[str, str] | None = None
    ) -> Any:
        return self.request("POST", url, json=json, params=params)

    def put(self, url: str, *, json: object = None) -> Any:
        return self.request("PUT", url, json=json)

    def patch(self, url: str, *, json: object = None) -> Any:
        return self.request("PATCH", url, json=json)

    def request(
        self,
        method: str,
        url: str,
        *,
        json: object = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Return the decoded JSON body, or ``None`` for an empty response."""

        headers = self._headers()
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(
            self._request_async(method, url, json=json, params=params, headers=headers)
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token_provider is None:
            return headers
        try:
            token = self._token_provider()
        except RemoteCallError as exc:
            raise AuthenticationError(f"Could not obtain an access token: {exc}") from exc
        headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request_async(
        self,
        method: str,
        url: str,
        *,
        json: object,
        params: dict[str, str] | None,
        headers: dict[str, str],
    ) -> Any:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        try:
            response = await self._client.request(
                method, url, json=json, params=params, headers=headers
            )
        except httpx.HTTPError as exc:
            raise RemoteCallError(f"{method} {url} failed: {exc}", url=url) from exc

        _raise_for_status(method, url, response)
        if not response.content:
            return None
        return response.json()


def _raise_for_status(method: str, url: str, response: httpx.Response) -> None:
    if not response.is_error:
        return
    message = _remote_message(response) or f"{method} {url} returned {response.status_code}"
    log.debug("%s %s failed with %s: %s", method, url, response.status_code, message)
    error_type = NotFoundError if response.status_code == httpx.codes.NOT_FOUND else RemoteCallError
    raise error_type(message, status_code=response.status_code, url=url)


def _remote_message(response: httpx.Response) -> str | None:
    try:
        return ErrorResponse.model_validate(response.json()).remote_message
    except ValueError:
        return None


def v4_content(body: object) -> Any:
    """Unwrap ``result.content`` from a V4 response body."""

    if body is None:
        return None
    return V4Response.model_validate(body).result.content
