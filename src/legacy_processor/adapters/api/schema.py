"""Pydantic models describing the Topcoder API responses the processor reads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class V4Result(ApiBaseModel):
    success: bool | None = None
    status: int | None = None
    content: Any = None


class V4Response(ApiBaseModel):
    """The ``{"result": {"content": ...}}`` envelope used by every V4 endpoint."""

    result: V4Result


class ErrorResponse(ApiBaseModel):
    message: str | None = None
    result: V4Result | None = None

    @property
    def remote_message(self) -> str | None:
        if self.message:
            return self.message
        if self.result is not None and isinstance(self.result.content, str):
            return self.result.content
        return None


class ProjectResponse(ApiBaseModel):
    id: int
    direct_project_id: int | None = Field(default=None, alias="directProjectId")


class ChallengeTypeResponse(ApiBaseModel):
    id: str
    name: str | None = None
    abbreviation: str
    legacy_id: int | None = Field(default=None, alias="legacyId")


class CanonicalChallengeResponse(ApiBaseModel):
    id: str
    type_id: str | None = Field(default=None, alias="typeId")


class TokenResponse(ApiBaseModel):
    access_token: str
    expires_in: int | None = None
