"""Reads from and write-backs to the canonical (V5) challenge record."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from legacy_processor.domain.errors import NotFoundError
from legacy_processor.domain.translator import format_timestamp

from .schema import CanonicalChallengeResponse

if TYPE_CHECKING:
    from collections.abc import Mapping

    from legacy_processor.config.services import ServiceEndpoints

    from .client import ServiceClient

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class HttpCanonicalChallenges:
    def __init__(
        self,
        *,
        client: ServiceClient,
        endpoints: ServiceEndpoints,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._client = client
        self._base_url = endpoints.challenges.rstrip("/")
        self._clock = clock

    def get_challenge_type_id(self, challenge_id: str) -> str | None:
        url = f"{self._base_url}/{challenge_id}"
        body = self._client.get(url)
        if not body:
            raise NotFoundError(f"Challenge {challenge_id} not found", url=url)
        return CanonicalChallengeResponse.model_validate(body).type_id

    def write_back(
        self,
        challenge_id: str,
        *,
        legacy: Mapping[str, object],
        legacy_project_id: int | None,
        legacy_forum_id: int | None,
        legacy_modified_at: str | None,
        legacy_id: int,
    ) -> None:
        """Patch the legacy references onto the canonical record.

        The ``legacy`` sub-record is merged, not replaced: keys the legacy system
        did not return keep the values the event carried.
        """

        merged: dict[str, object] = dict(legacy)
        merged["directProjectId"] = legacy_project_id
        if legacy_forum_id is not None:
            merged["forumId"] = legacy_forum_id
        merged["informixModified"] = legacy_modified_at or format_timestamp(self._clock())

        self._client.patch(
            f"{self._base_url}/{challenge_id}",
            json={"legacy": merged, "legacyId": legacy_id},
        )
        log.debug("Wrote legacy id %s back to challenge %s", legacy_id, challenge_id)
