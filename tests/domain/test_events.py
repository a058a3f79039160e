from __future__ import annotations

from typing import Any

import pytest

from legacy_processor.domain.errors import SchemaValidationError
from legacy_processor.domain.events import (
    CreateChallengePayload,
    MessageKind,
    UpdateChallengePayload,
    parse_message,
)
from legacy_processor.domain.model import ChallengeStatus, PrizeSetType
from tests.support.challenges import make_envelope, make_payload


def test_parse_create_message() -> None:
    message = parse_message(
        MessageKind.CREATE,
        make_envelope(
            make_payload(
                phases=[{"id": "p1", "phaseId": "def-1", "duration": 1000, "name": "Submission"}],
                prizeSets=[{"type": "Challenge prizes", "prizes": [{"value": 10, "type": "USD"}]}],
            )
        ),
    )

    assert message.kind is MessageKind.CREATE
    assert message.originator == "challenge-api"
    assert isinstance(message.payload, CreateChallengePayload)
    assert message.payload.status is ChallengeStatus.ACTIVE
    assert message.payload.phases is not None
    assert message.payload.phases[0].definition_id == "def-1"
    assert message.payload.prize_sets is not None
    assert message.payload.prize_sets[0].type is PrizeSetType.CHALLENGE_PRIZES


def test_optional_fields_stay_absent() -> None:
    message = parse_message(MessageKind.UPDATE, make_envelope({"id": "abc"}))

    payload = message.payload
    assert isinstance(payload, UpdateChallengePayload)
    assert payload.legacy_id is None
    assert payload.status is None
    assert payload.phases is None
    assert payload.legacy_data == {}


def test_raw_payload_is_kept_verbatim() -> None:
    raw = make_payload(legacyId=777, somethingNew=[1, 2, 3])

    message = parse_message(MessageKind.UPDATE, make_envelope(raw))

    assert message.raw_payload == raw


@pytest.mark.parametrize(
    ("overrides", "location"),
    [
        ({"status": "Launched"}, "status"),
        ({"projectId": -1}, "projectId"),
        ({"name": None}, "name"),
        ({"legacy": {"reviewType": "COMMUNITY"}}, "legacy.track"),
        ({"phases": [{"id": "p1", "duration": 0}]}, "phases.0.duration"),
        ({"prizeSets": [{"type": "Challenge prizes", "prizes": []}]}, "prizeSets.0.prizes"),
        ({"prizeSets": [{"type": "Bonus", "prizes": [{"value": 1}]}]}, "prizeSets.0.type"),
    ],
)
def test_invalid_create_payloads_are_rejected(overrides: dict[str, Any], location: str) -> None:
    with pytest.raises(SchemaValidationError) as exc:
        parse_message(MessageKind.CREATE, make_envelope(make_payload(**overrides)))

    assert any(error.startswith(location) for error in exc.value.errors)


@pytest.mark.parametrize(
    "overrides",
    [
        {"tags": []},
        {"prizeSets": []},
        {"legacyId": 0},
    ],
)
def test_invalid_update_payloads_are_rejected(overrides: dict[str, Any]) -> None:
    with pytest.raises(SchemaValidationError):
        parse_message(MessageKind.UPDATE, make_envelope(make_payload(**overrides)))


def test_update_allows_prize_sets_without_prizes() -> None:
    payload = make_payload(prizeSets=[{"type": "Checkpoint prizes"}])

    message = parse_message(MessageKind.UPDATE, make_envelope(payload))

    assert message.payload.prize_sets is not None
    assert message.payload.prize_sets[0].prizes == []


def test_envelope_fields_are_required() -> None:
    envelope = make_envelope(make_payload())
    del envelope["mime-type"]

    with pytest.raises(SchemaValidationError, match="mime-type"):
        parse_message(MessageKind.CREATE, envelope)


def test_update_requires_challenge_id() -> None:
    payload = make_payload(legacyId=777)
    del payload["id"]

    with pytest.raises(SchemaValidationError) as exc:
        parse_message(MessageKind.UPDATE, make_envelope(payload))

    assert any(error.startswith("id") for error in exc.value.errors)
