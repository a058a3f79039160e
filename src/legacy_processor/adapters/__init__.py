"""Adapters for remote APIs, markdown rendering and the legacy relational store."""

from __future__ import annotations

from .rendering import render_markdown
from .timeline import LegacyPhase, PhaseType, SqlAlchemyTimelineStore

__all__ = [
    "LegacyPhase",
    "PhaseType",
    "SqlAlchemyTimelineStore",
    "render_markdown",
]
