from __future__ import annotations

import io
import json
from contextlib import nullcontext
from typing import TYPE_CHECKING

import pytest

from legacy_processor import main as main_module
from legacy_processor.domain.errors import RemoteCallError
from tests.support.challenges import UPDATE_TOPIC, make_envelope, make_payload

if TYPE_CHECKING:
    from pathlib import Path

    from legacy_processor.domain import ReconciliationEngine
    from tests.support.challenges import FakeLegacyGateway


@pytest.fixture(autouse=True)
def wired_engine(monkeypatch: pytest.MonkeyPatch, engine: ReconciliationEngine) -> None:
    monkeypatch.delenv("CREATE_CHALLENGE_TOPIC", raising=False)
    monkeypatch.delenv("UPDATE_CHALLENGE_TOPIC", raising=False)
    monkeypatch.setattr(main_module, "build_client", lambda _config: nullcontext())
    monkeypatch.setattr(main_module, "build_engine", lambda **_: engine)


def _write(tmp_path: Path, name: str, document: object) -> str:
    path = tmp_path / name
    path.write_text(json.dumps(document), encoding="utf-8")
    return str(path)


def test_main_processes_every_message_in_order(
    tmp_path: Path, legacy_gateway: FakeLegacyGateway
) -> None:
    first = _write(tmp_path, "one.json", make_envelope(make_payload()))
    second = _write(
        tmp_path,
        "many.json",
        [make_envelope(make_payload(status="New")), make_envelope(make_payload(name="Second"))],
    )

    main_module.main([first, second])

    assert legacy_gateway.call_names == ["create", "create"]


def test_main_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, legacy_gateway: FakeLegacyGateway
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(make_envelope(make_payload()))))

    main_module.main(["-"])

    assert legacy_gateway.call_names == ["create"]


def test_main_topic_flag_overrides_envelope(
    tmp_path: Path, legacy_gateway: FakeLegacyGateway
) -> None:
    legacy_gateway.unavailable = True
    source = _write(tmp_path, "update.json", make_envelope(make_payload(legacyId=777)))

    main_module.main([source, "--topic", UPDATE_TOPIC])

    assert legacy_gateway.call_names == ["get"]


def test_main_invalid_json_exits_with_usage_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(path)])

    assert excinfo.value.code == 2
    assert "is not valid JSON" in capsys.readouterr().err


def test_main_rejects_non_object_messages(tmp_path: Path) -> None:
    source = _write(tmp_path, "numbers.json", [1, 2])

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([source])

    assert excinfo.value.code == 2


def test_main_schema_failure_exits_with_usage_error(tmp_path: Path) -> None:
    source = _write(tmp_path, "invalid.json", make_envelope({"status": "Active"}))

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([source])

    assert excinfo.value.code == 2


def test_main_processing_failure_exits_with_error(
    tmp_path: Path,
    legacy_gateway: FakeLegacyGateway,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def failing_create(_dto: object) -> object:
        raise RemoteCallError("Project is not active", status_code=400)

    legacy_gateway.create = failing_create  # type: ignore[method-assign]
    source = _write(tmp_path, "create.json", make_envelope(make_payload()))

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([source])

    assert excinfo.value.code == 1
    assert "Project is not active" in capsys.readouterr().err
