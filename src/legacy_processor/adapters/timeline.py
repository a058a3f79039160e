"""Phase scheduling queries against the legacy relational store.

Every operation opens its own connection, runs one parameterised statement and
releases the connection whether it succeeded or not. Writes are committed on
success and rolled back explicitly on failure.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.sql.elements import TextClause

    from legacy_processor.config.storage import DatabaseConfig

log = getLogger(__name__)

QUERY_GET_PHASE_TYPES = text("SELECT phase_type_id, name FROM phase_type_lu")
QUERY_GET_CHALLENGE_PHASES = text(
    "SELECT project_phase_id, scheduled_start_time, scheduled_end_time, duration, "
    "phase_status_id, phase_type_id FROM project_phase WHERE project_id = :project_id"
)
QUERY_UPDATE_CHALLENGE_PHASE = text(
    "UPDATE project_phase SET scheduled_start_time = :start_time, "
    "scheduled_end_time = :end_time, duration = :duration, phase_status_id = :status_id "
    "WHERE project_phase_id = :phase_id AND project_id = :project_id"
)
QUERY_ENABLE_TIMELINE_NOTIFICATIONS = text(
    "INSERT INTO project_info (project_id, project_info_type_id, value, create_user, "
    "create_date, modify_user, modify_date) VALUES (:project_id, :info_type_id, :value, "
    ":created_by, :created_at, :created_by, :created_at)"
)

TIMELINE_NOTIFICATIONS_INFO_TYPE_ID = "11"
TIMELINE_NOTIFICATIONS_ON = "On"


@dataclass(frozen=True, slots=True)
class PhaseType:
    phase_type_id: int
    name: str


@dataclass(frozen=True, slots=True)
class LegacyPhase:
    project_phase_id: int
    scheduled_start_time: datetime | None
    scheduled_end_time: datetime | None
    duration: int | None
    phase_status_id: int
    phase_type_id: int


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyTimelineStore:
    def __init__(self, engine: Engine, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._engine = engine
        self._clock = clock

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> SqlAlchemyTimelineStore:
        return cls(create_engine(config.uri))

    def get_phase_types(self) -> list[PhaseType]:
        with self._engine.connect() as connection:
            try:
                rows = connection.execute(QUERY_GET_PHASE_TYPES).all()
            except SQLAlchemyError as exc:
                log.error("Error in 'get_phase_types': %s", exc)
                raise
        return [PhaseType(phase_type_id=row.phase_type_id, name=row.name) for row in rows]

    def get_challenge_phases(self, legacy_id: int) -> list[LegacyPhase]:
        with self._engine.connect() as connection:
            try:
                rows = connection.execute(
                    QUERY_GET_CHALLENGE_PHASES, {"project_id": legacy_id}
                ).all()
            except SQLAlchemyError as exc:
                log.error("Error in 'get_challenge_phases': %s", exc)
                raise
        return [
            LegacyPhase(
                project_phase_id=row.project_phase_id,
                scheduled_start_time=row.scheduled_start_time,
                scheduled_end_time=row.scheduled_end_time,
                duration=row.duration,
                phase_status_id=row.phase_status_id,
                phase_type_id=row.phase_type_id,
            )
            for row in rows
        ]

    def update_phase(
        self,
        phase_id: int,
        legacy_id: int,
        start_time: datetime,
        end_time: datetime,
        duration: int,
        status_id: int,
    ) -> int:
        """Reschedule one phase and return the number of rows touched."""

        params = {
            "start_time": start_time,
            "end_time": end_time,
            "duration": duration,
            "status_id": status_id,
            "phase_id": phase_id,
            "project_id": legacy_id,
        }
        rowcount = self._write("update_phase", QUERY_UPDATE_CHALLENGE_PHASE, params)
        log.info("Phase %s has been updated", phase_id)
        return rowcount

    def enable_timeline_notifications(self, legacy_id: int, created_by: str) -> None:
        params = {
            "project_id": legacy_id,
            "info_type_id": TIMELINE_NOTIFICATIONS_INFO_TYPE_ID,
            "value": TIMELINE_NOTIFICATIONS_ON,
            "created_by": created_by,
            "created_at": self._clock(),
        }
        self._write("enable_timeline_notifications", QUERY_ENABLE_TIMELINE_NOTIFICATIONS, params)
        log.info("Notifications have been enabled for challenge %s", legacy_id)

    def _write(self, operation: str, statement: TextClause, params: dict[str, object]) -> int:
        with self._engine.connect() as connection:
            try:
                result = connection.execute(statement, params)
                connection.commit()
            except SQLAlchemyError as exc:
                log.error("Error in '%s': %s, rolling back transaction", operation, exc)
                connection.rollback()
                raise
        return result.rowcount
