"""Ports the reconciliation engine depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .model import (
        ChallengeTypeRef,
        LegacyChallengeDTO,
        LegacyChallengeRecord,
        ReferenceEntry,
        RenderedText,
    )


@runtime_checkable
class ForeignLookup(Protocol):
    """Read-only resolution of canonical references into legacy ones."""

    def resolve_project(self, project_id: int) -> int | None: ...

    def resolve_challenge_type(self, type_id: str) -> ChallengeTypeRef: ...

    def list_technologies(self) -> list[ReferenceEntry]: ...

    def list_platforms(self) -> list[ReferenceEntry]: ...


@runtime_checkable
class LegacyGateway(Protocol):
    """Synchronous operations against the legacy challenge API."""

    def create(self, dto: LegacyChallengeDTO) -> LegacyChallengeRecord: ...

    def get(self, legacy_id: int) -> LegacyChallengeRecord | None:
        """Return the legacy record; raise ``LegacyUnavailableError`` when unreadable."""
        ...

    def update(self, legacy_id: int, dto: LegacyChallengeDTO) -> None: ...

    def activate(self, legacy_id: int) -> None: ...

    def close(self, legacy_id: int, winner_id: int) -> None: ...


@runtime_checkable
class CanonicalChallenges(Protocol):
    """Reads from and write-backs to the canonical challenge record."""

    def get_challenge_type_id(self, challenge_id: str) -> str | None: ...

    def write_back(
        self,
        challenge_id: str,
        *,
        legacy: Mapping[str, object],
        legacy_project_id: int | None,
        legacy_forum_id: int | None,
        legacy_modified_at: str | None,
        legacy_id: int,
    ) -> None: ...


@runtime_checkable
class EventPublisher(Protocol):
    def publish(self, topic: str, payload: Mapping[str, object]) -> None: ...


@runtime_checkable
class MarkdownRenderer(Protocol):
    def __call__(self, text: str) -> RenderedText: ...


__all__ = [
    "CanonicalChallenges",
    "EventPublisher",
    "ForeignLookup",
    "LegacyGateway",
    "MarkdownRenderer",
]
