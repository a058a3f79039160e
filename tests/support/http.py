from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from legacy_processor.adapters.http_resilience import ResilientClient
from legacy_processor.config.http_resilience import ResilienceConfig
from legacy_processor.config.services import ServiceEndpoints

ENDPOINTS = ServiceEndpoints(
    legacy_challenges="https://api.test/v4/challenges",
    legacy_technologies="https://api.test/v4/technologies",
    legacy_platforms="https://api.test/v4/platforms",
    challenges="https://api.test/v5/challenges",
    challenge_types="https://api.test/v5/challengeTypes",
    projects="https://api.test/v5/projects",
    bus_events="https://api.test/v5/bus/events",
)

RESILIENCE = ResilienceConfig(name="test-api")


def make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


def v4_body(content: object) -> dict[str, object]:
    return {"result": {"success": True, "status": 200, "content": content}}


@dataclass
class RecordingHandler:
    """Answer requests from a ``(method, path) -> (status, body)`` table and keep them."""

    routes: dict[tuple[str, str], tuple[int, object]]
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route for {request.url.path}"})
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def json_bodies(self) -> list[Any]:
        return [json.loads(request.content) if request.content else None for request in self.requests]
