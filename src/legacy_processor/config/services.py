"""Remote service endpoints, topics and credentials."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .env import env_int, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_API_BASE_URL = "https://api.topcoder-dev.com"
DEFAULT_ORIGINATOR = "legacy-challenge-processor"
DEFAULT_CREATE_TOPIC = "challenge.notification.create"
DEFAULT_UPDATE_TOPIC = "challenge.notification.update"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ServiceEndpoints:
    """Absolute URLs of every remote collection the processor talks to."""

    legacy_challenges: str
    legacy_technologies: str
    legacy_platforms: str
    challenges: str
    challenge_types: str
    projects: str
    bus_events: str


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    endpoints: ServiceEndpoints
    create_topic: str = DEFAULT_CREATE_TOPIC
    update_topic: str = DEFAULT_UPDATE_TOPIC
    originator: str = DEFAULT_ORIGINATOR
    resilience: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(name="topcoder-api")
    )


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Client credentials for machine-to-machine tokens."""

    auth_url: str
    audience: str
    client_id: str
    client_secret: str
    proxy_url: str | None = None
    token_cache_seconds: int = 86_000


def _endpoint(name: str, base_url: str, path: str) -> str:
    return os.getenv(name) or f"{base_url.rstrip('/')}/{path}"


def get_service_endpoints() -> ServiceEndpoints:
    base_url = os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL)
    return ServiceEndpoints(
        legacy_challenges=_endpoint("V4_CHALLENGE_API_URL", base_url, "v4/challenges"),
        legacy_technologies=_endpoint("V4_TECHNOLOGIES_API_URL", base_url, "v4/technologies"),
        legacy_platforms=_endpoint("V4_PLATFORMS_API_URL", base_url, "v4/platforms"),
        challenges=_endpoint("V5_CHALLENGE_API_URL", base_url, "v5/challenges"),
        challenge_types=_endpoint("V5_CHALLENGE_TYPE_API_URL", base_url, "v5/challengeTypes"),
        projects=_endpoint("V5_PROJECTS_API_URL", base_url, "v5/projects"),
        bus_events=_endpoint("BUSAPI_EVENTS_URL", base_url, "v5/bus/events"),
    )


def get_service_config(*, resilience: ResilienceConfig | None = None) -> ServiceConfig:
    max_calls = env_int("API_RATE_LIMIT_PER_SECOND", 0)
    return ServiceConfig(
        endpoints=get_service_endpoints(),
        create_topic=os.getenv("CREATE_CHALLENGE_TOPIC", DEFAULT_CREATE_TOPIC),
        update_topic=os.getenv("UPDATE_CHALLENGE_TOPIC", DEFAULT_UPDATE_TOPIC),
        originator=os.getenv("KAFKA_MESSAGE_ORIGINATOR", DEFAULT_ORIGINATOR),
        resilience=resilience
        or ResilienceConfig(
            name="topcoder-api",
            timeout_seconds=float(env_int("API_TIMEOUT_SECONDS", int(DEFAULT_TIMEOUT_SECONDS))),
            retry=RetryPolicy(total=env_int("API_RETRY_TOTAL", 3)),
            ratelimit=RateLimit(max_calls=max_calls, per_seconds=1.0) if max_calls > 0 else None,
        ),
    )


def get_auth_config() -> AuthConfig:
    values = require_env_vars(
        ("AUTH0_URL", "AUTH0_AUDIENCE", "AUTH0_CLIENT_ID", "AUTH0_CLIENT_SECRET")
    )
    return AuthConfig(
        auth_url=values["AUTH0_URL"],
        audience=values["AUTH0_AUDIENCE"],
        client_id=values["AUTH0_CLIENT_ID"],
        client_secret=values["AUTH0_CLIENT_SECRET"],
        proxy_url=os.getenv("AUTH0_PROXY_SERVER_URL") or None,
        token_cache_seconds=env_int("TOKEN_CACHE_TIME", 86_000),
    )
