from __future__ import annotations

from datetime import UTC, datetime

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.pool import StaticPool

from legacy_processor.adapters import LegacyPhase, PhaseType, SqlAlchemyTimelineStore
from legacy_processor.adapters.timeline import (
    TIMELINE_NOTIFICATIONS_INFO_TYPE_ID,
    TIMELINE_NOTIFICATIONS_ON,
)
from legacy_processor.config.storage import DatabaseConfig

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

SCHEMA = (
    "CREATE TABLE phase_type_lu (phase_type_id INTEGER PRIMARY KEY, name TEXT NOT NULL)",
    "CREATE TABLE project_phase (project_phase_id INTEGER PRIMARY KEY, project_id INTEGER, "
    "scheduled_start_time TIMESTAMP, scheduled_end_time TIMESTAMP, duration INTEGER, "
    "phase_status_id INTEGER, phase_type_id INTEGER)",
    "CREATE TABLE project_info (project_id INTEGER, project_info_type_id TEXT, value TEXT, "
    "create_user TEXT, create_date TIMESTAMP, modify_user TEXT, modify_date TIMESTAMP, "
    "PRIMARY KEY (project_id, project_info_type_id))",
)

SEED = (
    "INSERT INTO phase_type_lu VALUES (1, 'Registration'), (2, 'Submission')",
    "INSERT INTO project_phase VALUES (100, 777, NULL, NULL, 3600, 1, 1), "
    "(101, 777, NULL, NULL, 7200, 1, 2), (200, 888, NULL, NULL, 60, 1, 1)",
)


@pytest.fixture
def store() -> SqlAlchemyTimelineStore:
    engine = create_engine("sqlite://", poolclass=StaticPool)
    with engine.begin() as connection:
        for statement in (*SCHEMA, *SEED):
            connection.execute(text(statement))
    return SqlAlchemyTimelineStore(engine, clock=lambda: NOW)


def _scalar(store: SqlAlchemyTimelineStore, sql: str) -> object:
    with store._engine.connect() as connection:  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return connection.execute(text(sql)).scalar()


def test_phase_types_are_listed(store: SqlAlchemyTimelineStore) -> None:
    assert store.get_phase_types() == [
        PhaseType(phase_type_id=1, name="Registration"),
        PhaseType(phase_type_id=2, name="Submission"),
    ]


def test_challenge_phases_are_scoped_to_the_challenge(store: SqlAlchemyTimelineStore) -> None:
    phases = store.get_challenge_phases(777)

    assert [phase.project_phase_id for phase in phases] == [100, 101]
    assert phases[0] == LegacyPhase(
        project_phase_id=100,
        scheduled_start_time=None,
        scheduled_end_time=None,
        duration=3600,
        phase_status_id=1,
        phase_type_id=1,
    )


def test_update_phase_is_committed(store: SqlAlchemyTimelineStore) -> None:
    rowcount = store.update_phase(
        101,
        777,
        datetime(2024, 5, 1, 12, 0),
        datetime(2024, 5, 3, 12, 0),
        172_800,
        2,
    )

    assert rowcount == 1
    assert _scalar(store, "SELECT duration FROM project_phase WHERE project_phase_id = 101") == 172_800
    assert _scalar(store, "SELECT phase_status_id FROM project_phase WHERE project_phase_id = 101") == 2


def test_update_phase_ignores_phases_of_other_challenges(store: SqlAlchemyTimelineStore) -> None:
    rowcount = store.update_phase(
        200, 777, datetime(2024, 5, 1, 12, 0), datetime(2024, 5, 2, 12, 0), 10, 2
    )

    assert rowcount == 0
    assert _scalar(store, "SELECT duration FROM project_phase WHERE project_phase_id = 200") == 60


def test_enable_timeline_notifications_inserts_info_row(store: SqlAlchemyTimelineStore) -> None:
    store.enable_timeline_notifications(777, "132456")

    with store._engine.connect() as connection:  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        row = connection.execute(
            text("SELECT project_info_type_id, value, create_user, modify_user FROM project_info")
        ).one()
    assert tuple(row) == (
        TIMELINE_NOTIFICATIONS_INFO_TYPE_ID,
        TIMELINE_NOTIFICATIONS_ON,
        "132456",
        "132456",
    )


def test_failed_write_is_rolled_back_and_raised(store: SqlAlchemyTimelineStore) -> None:
    store.enable_timeline_notifications(777, "132456")

    with pytest.raises(IntegrityError):
        store.enable_timeline_notifications(777, "132456")

    assert _scalar(store, "SELECT COUNT(*) FROM project_info") == 1
    # the store stays usable after the rollback
    assert len(store.get_challenge_phases(777)) == 2


def test_from_config_builds_an_engine() -> None:
    store = SqlAlchemyTimelineStore.from_config(DatabaseConfig(uri="sqlite://"))

    with pytest.raises(OperationalError, match="phase_type_lu"):
        store.get_phase_types()
