"""Domain types shared by the translator, the engine and the adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

type Number = int | float


class ChallengeStatus(StrEnum):
    NEW = "New"
    DRAFT = "Draft"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    DELETED = "Deleted"
    CANCELED = "Canceled"
    CANCELLED_FAILED_REVIEW = "Cancelled - Failed Review"
    CANCELLED_FAILED_SCREENING = "Cancelled - Failed Screening"
    CANCELLED_ZERO_SUBMISSIONS = "Cancelled - Zero Submissions"
    CANCELLED_WINNER_UNRESPONSIVE = "Cancelled - Winner Unresponsive"
    CANCELLED_CLIENT_REQUEST = "Cancelled - Client Request"
    CANCELLED_REQUIREMENTS_INFEASIBLE = "Cancelled - Requirements Infeasible"
    CANCELLED_ZERO_REGISTRATIONS = "Cancelled - Zero Registrations"


class PrizeSetType(StrEnum):
    CHALLENGE_PRIZES = "Challenge prizes"
    COPILOT_PAYMENT = "Copilot payment"
    REVIEWER_PAYMENT = "Reviewer payment"
    CHECKPOINT = "Checkpoint prizes"


class ReconcileOutcome(StrEnum):
    """Terminal state of one reconciliation pass. Failures surface as exceptions."""

    SKIPPED_NEW = "skipped_new"
    CREATED = "created"
    UPDATED = "updated"
    DEFERRED_MISSING_LEGACY = "deferred_missing_legacy"


@dataclass(frozen=True, slots=True)
class ChallengeTypeRef:
    abbreviation: str
    legacy_id: int | None


@dataclass(frozen=True, slots=True)
class RenderedText:
    """Rendered markdown; ``converted`` is False when the raw text was kept."""

    text: str
    converted: bool


class LegacyModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ReferenceEntry(BaseModel):
    """A technology or platform entry as listed by the legacy API."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int
    name: str


class LegacyChallengeRecord(LegacyModel):
    id: int
    project_id: int | None = Field(default=None, alias="projectId")
    forum_id: int | None = Field(default=None, alias="forumId")
    current_status: str | None = Field(default=None, alias="currentStatus")
    updated_at: str | None = Field(default=None, alias="updatedAt")


class LegacyChallengeDTO(LegacyModel):
    """Body of the legacy create/update call.

    Only fields that were assigned are serialised, so "absent" and "explicitly
    null" stay distinct. The checkpoint timing fields rely on this: once phases
    are translated they are always assigned, possibly to ``None``.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, validate_assignment=True)

    track: str | None = None
    name: str | None = None
    review_type: str | None = Field(default=None, alias="reviewType")
    project_id: int | None = Field(default=None, alias="projectId")
    status: str | None = None

    billing_account_id: int | None = Field(default=None, alias="billingAccountId")
    forum_id: int | None = Field(default=None, alias="forumId")
    copilot_id: int | None = Field(default=None, alias="copilotId")

    confidentiality_type: str | None = Field(default=None, alias="confidentialityType")
    submission_guidelines: str | None = Field(default=None, alias="submissionGuidelines")
    submission_visibility: bool | None = Field(default=None, alias="submissionVisibility")
    milestone_id: int | None = Field(default=None, alias="milestoneId")

    sub_track: str | None = Field(default=None, alias="subTrack")
    task: bool | None = None
    legacy_type_id: int | None = Field(default=None, alias="legacyTypeId")

    detailed_requirements: str | None = Field(default=None, alias="detailedRequirements")
    private_description: str | None = Field(default=None, alias="privateDescription")

    registration_starts_at: str | None = Field(default=None, alias="registrationStartsAt")
    registration_ends_at: str | None = Field(default=None, alias="registrationEndsAt")
    registration_duration: Number | None = Field(default=None, alias="registrationDuration")
    submission_ends_at: str | None = Field(default=None, alias="submissionEndsAt")
    submission_duration: Number | None = Field(default=None, alias="submissionDuration")
    checkpoint_submission_starts_at: str | None = Field(
        default=None, alias="checkpointSubmissionStartsAt"
    )
    checkpoint_submission_ends_at: str | None = Field(
        default=None, alias="checkpointSubmissionEndsAt"
    )
    checkpoint_submission_duration: Number | None = Field(
        default=None, alias="checkpointSubmissionDuration"
    )

    number_of_checkpoint_prizes: int | None = Field(default=None, alias="numberOfCheckpointPrizes")
    checkpoint_prize: Number | None = Field(default=None, alias="checkpointPrize")
    prizes: list[Number] | None = None

    technologies: list[ReferenceEntry] | None = None
    platforms: list[ReferenceEntry] | None = None

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
