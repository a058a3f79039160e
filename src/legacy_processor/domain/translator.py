"""Translate canonical challenge payloads into legacy create/update bodies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from legacy_processor.config.legacy import LegacyDefaults

from .errors import MissingPrizesError, MissingProjectError, MissingSubmissionPhaseError
from .model import LegacyChallengeDTO, PrizeSetType

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .events import ChallengePayload, PhasePayload, PrizeSetPayload
    from .model import ReferenceEntry
    from .ports import ForeignLookup, MarkdownRenderer

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""

    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True)
class PayloadTranslator:
    lookup: ForeignLookup
    render: MarkdownRenderer
    defaults: LegacyDefaults = field(default_factory=LegacyDefaults)
    clock: Callable[[], datetime] = _utcnow

    def translate(self, payload: ChallengePayload, *, is_create: bool) -> LegacyChallengeDTO:
        """Build the legacy body for ``payload``.

        Lookup failures surface with the remote system's message; every other
        failure propagates unchanged.
        """

        try:
            return self._translate(payload, is_create=is_create)
        except Exception:
            log.debug("Could not translate challenge %s", payload.id, exc_info=True)
            raise

    def _translate(self, payload: ChallengePayload, *, is_create: bool) -> LegacyChallengeDTO:
        legacy = payload.legacy
        dto = LegacyChallengeDTO(project_id=self._resolve_project_id(payload))
        _assign_present(
            dto,
            track=legacy.track if legacy else None,
            name=payload.name,
            review_type=legacy.review_type if legacy else None,
            status=payload.status.value if payload.status else None,
        )
        if payload.billing_account_id:
            dto.billing_account_id = payload.billing_account_id
        if legacy and legacy.forum_id:
            dto.forum_id = legacy.forum_id
        if payload.copilot_id:
            dto.copilot_id = payload.copilot_id

        if is_create:
            self._apply_create_defaults(dto, payload)
        if payload.type_id:
            self._apply_challenge_type(dto, payload.type_id)
        if payload.description:
            dto.detailed_requirements = self.render(payload.description).text
        if payload.private_description:
            dto.private_description = self.render(payload.private_description).text
        if payload.phases:
            self._apply_phases(dto, payload.phases, challenge_id=payload.id)
        if payload.prize_sets:
            self._apply_prizes(dto, payload.prize_sets)
        if payload.tags:
            self._apply_tags(dto, payload.tags)
        return dto

    def _resolve_project_id(self, payload: ChallengePayload) -> int:
        if payload.legacy is not None and payload.legacy.direct_project_id:
            return payload.legacy.direct_project_id
        if payload.project_id is None:
            raise MissingProjectError(f"Challenge {payload.id} does not reference a project")
        direct_project_id = self.lookup.resolve_project(payload.project_id)
        if not direct_project_id:
            raise MissingProjectError(
                f"Could not find Direct Project ID for Project {payload.project_id}"
            )
        return direct_project_id

    def _apply_create_defaults(self, dto: LegacyChallengeDTO, payload: ChallengePayload) -> None:
        defaults = self.defaults
        confidentiality = payload.legacy.confidentiality_type if payload.legacy else None
        dto.confidentiality_type = confidentiality or defaults.confidentiality_type
        dto.submission_guidelines = defaults.submission_guidelines
        dto.submission_visibility = defaults.submission_visibility
        dto.milestone_id = defaults.milestone_id

    def _apply_challenge_type(self, dto: LegacyChallengeDTO, type_id: str) -> None:
        challenge_type = self.lookup.resolve_challenge_type(type_id)
        dto.sub_track = challenge_type.abbreviation
        # legacy knows tasks as first-to-finish challenges
        if challenge_type.abbreviation == self.defaults.task_abbreviation:
            dto.task = True
            dto.sub_track = self.defaults.first_to_finish_abbreviation
        if challenge_type.legacy_id is not None:
            dto.legacy_type_id = challenge_type.legacy_id

    def _apply_phases(
        self,
        dto: LegacyChallengeDTO,
        phases: Sequence[PhasePayload],
        *,
        challenge_id: str,
    ) -> None:
        submission = _find_phase(phases, self.defaults.submission_phase_id)
        if submission is None:
            raise MissingSubmissionPhaseError(
                f"Challenge {challenge_id} has phases but no submission phase"
            )
        registration = _find_phase(phases, self.defaults.registration_phase_id) or submission
        now = self.clock()

        dto.registration_starts_at = format_timestamp(now)
        dto.registration_ends_at = format_timestamp(_after(now, registration.duration))
        dto.registration_duration = registration.duration
        dto.submission_ends_at = format_timestamp(_after(now, submission.duration))
        dto.submission_duration = submission.duration

        checkpoint = _find_phase(phases, self.defaults.checkpoint_submission_phase_id)
        if checkpoint is not None:
            dto.checkpoint_submission_starts_at = format_timestamp(now)
            dto.checkpoint_submission_ends_at = format_timestamp(_after(now, checkpoint.duration))
            dto.checkpoint_submission_duration = checkpoint.duration
        else:
            dto.checkpoint_submission_starts_at = None
            dto.checkpoint_submission_ends_at = None
            dto.checkpoint_submission_duration = None

    def _apply_prizes(self, dto: LegacyChallengeDTO, prize_sets: Sequence[PrizeSetPayload]) -> None:
        # every checkpoint winner receives the same amount
        checkpoint = _find_prize_set(prize_sets, PrizeSetType.CHECKPOINT)
        if checkpoint is not None and checkpoint.prizes:
            dto.number_of_checkpoint_prizes = len(checkpoint.prizes)
            dto.checkpoint_prize = checkpoint.prizes[0].value
        else:
            dto.number_of_checkpoint_prizes = 0
            dto.checkpoint_prize = 0

        challenge_prizes = _find_prize_set(prize_sets, PrizeSetType.CHALLENGE_PRIZES)
        if challenge_prizes is None:
            raise MissingPrizesError("Challenge prize information is invalid.")
        dto.prizes = sorted((prize.value for prize in challenge_prizes.prizes), reverse=True)

    def _apply_tags(self, dto: LegacyChallengeDTO, tags: Sequence[str]) -> None:
        names = set(tags)
        dto.technologies = _filter_by_name(self.lookup.list_technologies(), names)
        dto.platforms = _filter_by_name(self.lookup.list_platforms(), names)


def _assign_present(dto: LegacyChallengeDTO, **values: object) -> None:
    for name, value in values.items():
        if value is not None:
            setattr(dto, name, value)


def _after(start: datetime, duration_ms: float) -> datetime:
    return start + timedelta(milliseconds=duration_ms)


def _find_phase(phases: Sequence[PhasePayload], definition_id: str) -> PhasePayload | None:
    return next((phase for phase in phases if phase.definition_id == definition_id), None)


def _find_prize_set(
    prize_sets: Sequence[PrizeSetPayload], prize_set_type: PrizeSetType
) -> PrizeSetPayload | None:
    return next((prize_set for prize_set in prize_sets if prize_set.type == prize_set_type), None)


def _filter_by_name(entries: Sequence[ReferenceEntry], names: set[str]) -> list[ReferenceEntry]:
    return [entry for entry in entries if entry.name in names]
