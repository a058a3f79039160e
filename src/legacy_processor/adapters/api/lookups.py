"""Foreign key resolution against the canonical and legacy query endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from legacy_processor.domain.errors import NotFoundError
from legacy_processor.domain.model import ChallengeTypeRef, ReferenceEntry

from .client import v4_content
from .schema import ChallengeTypeResponse, ProjectResponse

if TYPE_CHECKING:
    from legacy_processor.config.services import ServiceEndpoints

    from .client import ServiceClient


class HttpForeignLookup:
    """Stateless lookups; every call goes to the network."""

    def __init__(self, *, client: ServiceClient, endpoints: ServiceEndpoints) -> None:
        self._client = client
        self._endpoints = endpoints

    def resolve_project(self, project_id: int) -> int | None:
        url = f"{self._endpoints.projects}/{project_id}"
        body = self._client.get(url)
        if not body:
            raise NotFoundError(f"Project {project_id} not found", url=url)
        return ProjectResponse.model_validate(body).direct_project_id

    def resolve_challenge_type(self, type_id: str) -> ChallengeTypeRef:
        url = f"{self._endpoints.challenge_types}/{type_id}"
        body = self._client.get(url)
        if not body:
            raise NotFoundError(f"Challenge type {type_id} not found", url=url)
        challenge_type = ChallengeTypeResponse.model_validate(body)
        return ChallengeTypeRef(
            abbreviation=challenge_type.abbreviation,
            legacy_id=challenge_type.legacy_id,
        )

    def list_technologies(self) -> list[ReferenceEntry]:
        return self._list_references(self._endpoints.legacy_technologies, "technologies")

    def list_platforms(self) -> list[ReferenceEntry]:
        return self._list_references(self._endpoints.legacy_platforms, "platforms")

    def _list_references(self, url: str, label: str) -> list[ReferenceEntry]:
        content = v4_content(self._client.get(url))
        if content is None:
            raise NotFoundError(f"No {label} returned by the legacy API", url=url)
        return [ReferenceEntry.model_validate(entry) for entry in content]
