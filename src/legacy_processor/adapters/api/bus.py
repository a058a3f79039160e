"""Publish events through the bus API."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from legacy_processor.domain.translator import format_timestamp

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .client import ServiceClient

log = getLogger(__name__)

MIME_TYPE = "application/json"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BusEventPublisher:
    def __init__(
        self,
        *,
        client: ServiceClient,
        events_url: str,
        originator: str,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._client = client
        self._events_url = events_url
        self._originator = originator
        self._clock = clock

    def publish(self, topic: str, payload: Mapping[str, object]) -> None:
        self._client.post(
            self._events_url,
            json={
                "topic": topic,
                "originator": self._originator,
                "timestamp": format_timestamp(self._clock()),
                "mime-type": MIME_TYPE,
                "payload": dict(payload),
            },
        )
        log.debug("Published event to %s", topic)
