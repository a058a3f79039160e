"""Legacy (V4) challenge API gateway."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from legacy_processor.domain.errors import LegacyUnavailableError, RemoteCallError
from legacy_processor.domain.model import LegacyChallengeRecord

from .client import v4_content

if TYPE_CHECKING:
    from legacy_processor.config.services import ServiceEndpoints
    from legacy_processor.domain.model import LegacyChallengeDTO

    from .client import ServiceClient

log = getLogger(__name__)


class HttpLegacyGateway:
    def __init__(self, *, client: ServiceClient, endpoints: ServiceEndpoints) -> None:
        self._client = client
        self._base_url = endpoints.legacy_challenges.rstrip("/")

    def create(self, dto: LegacyChallengeDTO) -> LegacyChallengeRecord:
        content = v4_content(self._client.post(self._base_url, json={"param": dto.to_payload()}))
        if content is None:
            raise RemoteCallError(
                "Legacy API did not return the created challenge", url=self._base_url
            )
        return LegacyChallengeRecord.model_validate(content)

    def get(self, legacy_id: int) -> LegacyChallengeRecord | None:
        try:
            body = self._client.get(self._challenge_url(legacy_id))
        except RemoteCallError as exc:
            raise LegacyUnavailableError(legacy_id, str(exc)) from exc
        content = v4_content(body)
        if content is None:
            return None
        return LegacyChallengeRecord.model_validate(content)

    def update(self, legacy_id: int, dto: LegacyChallengeDTO) -> None:
        self._client.put(self._challenge_url(legacy_id), json={"param": dto.to_payload()})

    def activate(self, legacy_id: int) -> None:
        self._client.post(f"{self._challenge_url(legacy_id)}/activate")

    def close(self, legacy_id: int, winner_id: int) -> None:
        self._client.post(
            f"{self._challenge_url(legacy_id)}/close", params={"winnerId": str(winner_id)}
        )

    def _challenge_url(self, legacy_id: int) -> str:
        return f"{self._base_url}/{legacy_id}"
