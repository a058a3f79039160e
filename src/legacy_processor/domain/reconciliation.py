"""Apply canonical challenge events to the legacy system.

One message runs to a terminal ``ReconcileOutcome`` in a single pass. The only
failure recovered here is an update whose legacy record cannot be read yet:
the unchanged payload is published back to the update topic and redelivered
later. Everything else is logged and re-raised to the dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from legacy_processor.config.legacy import LegacyDefaults

from .errors import LegacyUnavailableError, MissingWinnerError, NotFoundError
from .events import MessageKind
from .model import ChallengeStatus, ReconcileOutcome

if TYPE_CHECKING:
    from .events import ChallengeMessage, ChallengePayload
    from .model import LegacyChallengeRecord
    from .ports import CanonicalChallenges, EventPublisher, LegacyGateway
    from .translator import PayloadTranslator

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    translator: PayloadTranslator
    legacy: LegacyGateway
    canonical: CanonicalChallenges
    publisher: EventPublisher
    update_topic: str
    defaults: LegacyDefaults = field(default_factory=LegacyDefaults)

    def process(self, message: ChallengeMessage) -> ReconcileOutcome:
        if message.kind is MessageKind.CREATE:
            return self.process_create(message)
        return self.process_update(message)

    def process_create(self, message: ChallengeMessage) -> ReconcileOutcome:
        payload = message.payload
        if payload.status == ChallengeStatus.NEW:
            log.debug("Will skip creating challenge %s on legacy as status is New", payload.id)
            return ReconcileOutcome.SKIPPED_NEW
        return self._create(payload)

    def process_update(self, message: ChallengeMessage) -> ReconcileOutcome:
        payload = message.payload
        if payload.status == ChallengeStatus.NEW:
            log.debug("Will skip updating challenge %s on legacy as status is New", payload.id)
            return ReconcileOutcome.SKIPPED_NEW
        if payload.legacy_id is None:
            log.debug("Legacy ID does not exist for challenge %s. Will create...", payload.id)
            return self._create(payload)

        legacy_id = payload.legacy_id
        try:
            record = self.legacy.get(legacy_id)
        except LegacyUnavailableError as exc:
            log.info(
                "Challenge %s does not exist yet (%s). Will post the same message back "
                "to the bus API",
                legacy_id,
                exc.reason,
            )
            self.publisher.publish(self.update_topic, message.raw_payload)
            return ReconcileOutcome.DEFERRED_MISSING_LEGACY

        try:
            if record is None:
                raise NotFoundError(f"Could not find challenge {legacy_id}")
            dto = self.translator.translate(payload, is_create=False)
            log.debug("Parsed payload for challenge %s: %s", payload.id, dto.to_payload())
            self.legacy.update(legacy_id, dto)
            self._apply_status_transition(payload, record)
        except Exception:
            log.exception("Failed to update legacy challenge %s (%s)", legacy_id, payload.id)
            raise
        return ReconcileOutcome.UPDATED

    def _create(self, payload: ChallengePayload) -> ReconcileOutcome:
        try:
            dto = self.translator.translate(payload, is_create=True)
            log.debug("Parsed payload for challenge %s: %s", payload.id, dto.to_payload())
            created = self.legacy.create(dto)
            self.canonical.write_back(
                payload.id,
                legacy=payload.legacy_data,
                legacy_project_id=created.project_id,
                legacy_forum_id=created.forum_id,
                legacy_modified_at=created.updated_at,
                legacy_id=created.id,
            )
        except Exception:
            log.exception("Failed to create legacy challenge for %s", payload.id)
            raise
        log.info("Created legacy challenge %s for %s", created.id, payload.id)
        return ReconcileOutcome.CREATED

    def _apply_status_transition(
        self, payload: ChallengePayload, record: LegacyChallengeRecord
    ) -> None:
        target = payload.status
        if target is None:
            return
        previous = record.current_status
        if target == previous:
            return
        log.info("The status has changed from %s to %s", previous, target)

        if target == ChallengeStatus.ACTIVE:
            log.info("Activating challenge %s...", record.id)
            self.legacy.activate(record.id)
            log.info("Activated challenge %s", record.id)
        elif target == ChallengeStatus.COMPLETED:
            self._close_if_task(payload, record.id)

    def _close_if_task(self, payload: ChallengePayload, legacy_id: int) -> None:
        # legacy closes every other challenge type on its own
        type_id = self.canonical.get_challenge_type_id(payload.id)
        if type_id != self.defaults.task_type_id:
            log.info("Challenge type is %s. Skip closing challenge %s", type_id, legacy_id)
            return

        winner = next((w for w in payload.winners or () if w.placement == 1), None)
        if winner is None:
            raise MissingWinnerError(f"Cannot close challenge {legacy_id} without winners")
        log.info("Will close the challenge with ID %s. Winner %s!", legacy_id, winner.user_id)
        self.legacy.close(legacy_id, winner.user_id)
