"""Challenge reconciliation domain: schemas, translation and the engine."""

from __future__ import annotations

from .errors import (
    AuthenticationError,
    LegacyProcessorError,
    LegacyUnavailableError,
    MissingPrizesError,
    MissingProjectError,
    MissingSubmissionPhaseError,
    MissingWinnerError,
    NotFoundError,
    PayloadValidationError,
    RemoteCallError,
    SchemaValidationError,
)
from .events import ChallengeMessage, MessageKind, parse_message
from .model import (
    ChallengeStatus,
    ChallengeTypeRef,
    LegacyChallengeDTO,
    LegacyChallengeRecord,
    PrizeSetType,
    ReconcileOutcome,
    ReferenceEntry,
    RenderedText,
)
from .reconciliation import ReconciliationEngine
from .translator import PayloadTranslator

__all__ = [
    "AuthenticationError",
    "ChallengeMessage",
    "ChallengeStatus",
    "ChallengeTypeRef",
    "LegacyChallengeDTO",
    "LegacyChallengeRecord",
    "LegacyProcessorError",
    "LegacyUnavailableError",
    "MessageKind",
    "MissingPrizesError",
    "MissingProjectError",
    "MissingSubmissionPhaseError",
    "MissingWinnerError",
    "NotFoundError",
    "PayloadTranslator",
    "PayloadValidationError",
    "PrizeSetType",
    "ReconcileOutcome",
    "ReconciliationEngine",
    "ReferenceEntry",
    "RemoteCallError",
    "RenderedText",
    "SchemaValidationError",
    "parse_message",
]
