"""Application wiring and topic dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from legacy_processor.adapters.api import (
    BusEventPublisher,
    HttpCanonicalChallenges,
    HttpForeignLookup,
    HttpLegacyGateway,
    M2MTokenProvider,
    ServiceClient,
)
from legacy_processor.adapters.rendering import render_markdown
from legacy_processor.config import (
    get_auth_config,
    get_legacy_defaults,
    get_service_config,
)
from legacy_processor.domain import (
    MessageKind,
    PayloadTranslator,
    ReconciliationEngine,
    parse_message,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from legacy_processor.adapters.api import TokenProvider
    from legacy_processor.adapters.api.client import ClientFactory
    from legacy_processor.config import LegacyDefaults, ServiceConfig
    from legacy_processor.domain import ReconcileOutcome

log = getLogger(__name__)


def build_client(
    config: ServiceConfig,
    *,
    token_provider: TokenProvider | None = None,
    client_factory: ClientFactory | None = None,
) -> ServiceClient:
    """One authenticated client shared by every adapter; the caller closes it."""

    return ServiceClient(
        resilience=config.resilience,
        token_provider=token_provider or M2MTokenProvider(get_auth_config()),
        client_factory=client_factory,
    )


def build_engine(
    *,
    service_config: ServiceConfig | None = None,
    defaults: LegacyDefaults | None = None,
    client: ServiceClient | None = None,
    token_provider: TokenProvider | None = None,
    client_factory: ClientFactory | None = None,
) -> ReconciliationEngine:
    """Wire the reconciliation engine to the HTTP adapters."""

    config = service_config or get_service_config()
    legacy_defaults = defaults or get_legacy_defaults()
    if client is None:
        client = build_client(
            config, token_provider=token_provider, client_factory=client_factory
        )
    endpoints = config.endpoints

    translator = PayloadTranslator(
        lookup=HttpForeignLookup(client=client, endpoints=endpoints),
        render=render_markdown,
        defaults=legacy_defaults,
    )
    return ReconciliationEngine(
        translator=translator,
        legacy=HttpLegacyGateway(client=client, endpoints=endpoints),
        canonical=HttpCanonicalChallenges(client=client, endpoints=endpoints),
        publisher=BusEventPublisher(
            client=client,
            events_url=endpoints.bus_events,
            originator=config.originator,
        ),
        update_topic=config.update_topic,
        defaults=legacy_defaults,
    )


@dataclass(slots=True)
class MessageDispatcher:
    """Route raw bus messages to the engine by topic."""

    engine: ReconciliationEngine
    create_topic: str
    update_topic: str

    @classmethod
    def from_config(
        cls, engine: ReconciliationEngine, config: ServiceConfig | None = None
    ) -> MessageDispatcher:
        resolved = config or get_service_config()
        return cls(
            engine=engine,
            create_topic=resolved.create_topic,
            update_topic=resolved.update_topic,
        )

    def kind_for(self, topic: str) -> MessageKind | None:
        if topic == self.create_topic:
            return MessageKind.CREATE
        if topic == self.update_topic:
            return MessageKind.UPDATE
        return None

    def handle(
        self, message: Mapping[str, object], *, topic: str | None = None
    ) -> ReconcileOutcome | None:
        """Validate and reconcile one message; unknown topics are ignored."""

        resolved_topic = topic or str(message.get("topic", ""))
        kind = self.kind_for(resolved_topic)
        if kind is None:
            log.warning("Ignoring message on unexpected topic %r", resolved_topic)
            return None
        parsed = parse_message(kind, message)
        outcome = self.engine.process(parsed)
        log.info(
            "Processed %s message for challenge %s: %s", kind, parsed.payload.id, outcome
        )
        return outcome
