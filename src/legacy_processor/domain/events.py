"""Inbound challenge messages, one schema per message kind.

Every optional payload field defaults to ``None`` so that "the event did not
say" is always distinguishable from an explicit value. Unknown keys are kept on
the models, and the untouched mapping is kept on the message for requeueing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any, cast

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError

from .errors import SchemaValidationError
from .model import ChallengeStatus, PrizeSetType

PositiveNumber = Annotated[int | float, Field(gt=0)]


class MessageKind(StrEnum):
    CREATE = "create"
    UPDATE = "update"


class PayloadModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class LegacyInfo(PayloadModel):
    track: str
    review_type: str = Field(alias="reviewType")
    confidentiality_type: str | None = Field(default=None, alias="confidentialityType")
    direct_project_id: int | None = Field(default=None, alias="directProjectId")
    forum_id: PositiveInt | None = Field(default=None, alias="forumId")
    informix_modified: str | None = Field(default=None, alias="informixModified")


class PhasePayload(PayloadModel):
    id: str
    phase_id: str | None = Field(default=None, alias="phaseId")
    duration: PositiveNumber

    @property
    def definition_id(self) -> str:
        """The phase-definition id; older payloads only carry ``id``."""

        return self.phase_id or self.id


class PrizePayload(PayloadModel):
    value: PositiveNumber


class PrizeSetPayload(PayloadModel):
    type: PrizeSetType
    prizes: list[PrizePayload] = Field(default_factory=list)


class WinnerPayload(PayloadModel):
    user_id: int = Field(alias="userId")
    placement: int
    handle: str | None = None


class ChallengePayload(PayloadModel):
    """Fields shared by both message kinds."""

    id: str
    type_id: str | None = Field(default=None, alias="typeId")
    legacy: LegacyInfo | None = None
    billing_account_id: int | None = Field(default=None, alias="billingAccountId")
    description: str | None = None
    private_description: str | None = Field(default=None, alias="privateDescription")
    copilot_id: PositiveInt | None = Field(default=None, alias="copilotId")
    winners: list[WinnerPayload] | None = None

    # narrowed by the subclasses
    name: str | None = None
    project_id: int | None = Field(default=None, alias="projectId")
    status: ChallengeStatus | None = None
    legacy_id: PositiveInt | None = Field(default=None, alias="legacyId")
    phases: list[PhasePayload] | None = None
    prize_sets: list[PrizeSetPayload] | None = Field(default=None, alias="prizeSets")
    tags: list[str] | None = None

    @property
    def legacy_data(self) -> dict[str, Any]:
        if self.legacy is None:
            return {}
        return self.legacy.model_dump(by_alias=True, exclude_unset=True, mode="json")


class CreatePrizeSetPayload(PrizeSetPayload):
    prizes: list[PrizePayload] = Field(min_length=1)


class CreateChallengePayload(ChallengePayload):
    name: str
    project_id: PositiveInt = Field(alias="projectId")
    status: ChallengeStatus
    prize_sets: list[CreatePrizeSetPayload] | None = Field(default=None, alias="prizeSets")


class UpdateChallengePayload(ChallengePayload):
    project_id: PositiveInt | None = Field(default=None, alias="projectId")
    prize_sets: Annotated[list[PrizeSetPayload], Field(min_length=1)] | None = Field(
        default=None, alias="prizeSets"
    )
    tags: Annotated[list[str], Field(min_length=1)] | None = None


class MessageEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    topic: str
    originator: str
    timestamp: datetime
    mime_type: str = Field(alias="mime-type")
    payload: dict[str, Any]


_PAYLOAD_MODELS: dict[MessageKind, type[ChallengePayload]] = {
    MessageKind.CREATE: CreateChallengePayload,
    MessageKind.UPDATE: UpdateChallengePayload,
}


@dataclass(frozen=True, slots=True)
class ChallengeMessage:
    kind: MessageKind
    topic: str
    originator: str
    timestamp: datetime
    mime_type: str
    payload: ChallengePayload
    raw_payload: Mapping[str, Any]


def parse_message(kind: MessageKind, message: Mapping[str, object]) -> ChallengeMessage:
    """Validate ``message`` against the schema of ``kind``.

    Raises ``SchemaValidationError`` listing every violation.
    """

    try:
        envelope = MessageEnvelope.model_validate(message)
        payload = _PAYLOAD_MODELS[kind].model_validate(envelope.payload)
    except ValidationError as exc:
        errors = [_format_error(error) for error in exc.errors()]
        raise SchemaValidationError(
            f"Invalid {kind} message: {'; '.join(errors)}", errors=errors
        ) from exc
    return ChallengeMessage(
        kind=kind,
        topic=envelope.topic,
        originator=envelope.originator,
        timestamp=envelope.timestamp,
        mime_type=envelope.mime_type,
        payload=payload,
        raw_payload=envelope.payload,
    )


def _format_error(error: Mapping[str, object]) -> str:
    location = ".".join(str(part) for part in cast(tuple[object, ...], error.get("loc", ())))
    return f"{location or '<message>'}: {error.get('msg')}"


__all__ = [
    "ChallengeMessage",
    "ChallengePayload",
    "CreateChallengePayload",
    "CreatePrizeSetPayload",
    "LegacyInfo",
    "MessageEnvelope",
    "MessageKind",
    "PhasePayload",
    "PrizePayload",
    "PrizeSetPayload",
    "UpdateChallengePayload",
    "WinnerPayload",
    "parse_message",
]
