"""Pydantic models describing ORCID registry error payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrcidBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RegistryErrorPayload(OrcidBaseModel):
    """Error recorded by the sync engine: ``{"statusCode": 404, "error": "..."}``."""

    status_code: int | None = Field(default=None, alias="statusCode")
    error: str | None = None

    @field_validator("status_code", mode="before")
    @classmethod
    def _parse_status_code(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            return int(stripped) if stripped else None
        return value

    @field_validator("error", mode="before")
    @classmethod
    def _stringify_error(cls, value: object) -> object:
        # the registry sometimes nests a JSON object under "error"
        if value is None or isinstance(value, str):
            return value
        return str(value)
