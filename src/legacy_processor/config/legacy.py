"""Constants the legacy challenge API expects, lifted out of translation logic."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_REGISTRATION_PHASE_ID = "a93544bc-c165-4af4-b55e-18f3593b457a"
DEFAULT_SUBMISSION_PHASE_ID = "6950164f-3c5e-4bdc-abc8-22aaf5a1bd49"
DEFAULT_CHECKPOINT_SUBMISSION_PHASE_ID = "d8a2cdbe-84d1-4687-ab75-78a6a7efdcc8"
DEFAULT_TASK_TYPE_ID = "e885273d-aeda-42c0-917d-bfbf979afbba"


@dataclass(frozen=True, slots=True)
class LegacyDefaults:
    registration_phase_id: str = DEFAULT_REGISTRATION_PHASE_ID
    submission_phase_id: str = DEFAULT_SUBMISSION_PHASE_ID
    checkpoint_submission_phase_id: str = DEFAULT_CHECKPOINT_SUBMISSION_PHASE_ID
    task_type_id: str = DEFAULT_TASK_TYPE_ID

    task_abbreviation: str = "TASK"
    first_to_finish_abbreviation: str = "FIRST_2_FINISH"

    confidentiality_type: str = "public"
    submission_guidelines: str = "Please read above"
    submission_visibility: bool = True
    milestone_id: int = 1


def get_legacy_defaults() -> LegacyDefaults:
    return LegacyDefaults(
        registration_phase_id=os.getenv("REGISTRATION_PHASE_ID", DEFAULT_REGISTRATION_PHASE_ID),
        submission_phase_id=os.getenv("SUBMISSION_PHASE_ID", DEFAULT_SUBMISSION_PHASE_ID),
        checkpoint_submission_phase_id=os.getenv(
            "CHECKPOINT_SUBMISSION_PHASE_ID", DEFAULT_CHECKPOINT_SUBMISSION_PHASE_ID
        ),
        task_type_id=os.getenv("TASK_TYPE_ID", DEFAULT_TASK_TYPE_ID),
    )
