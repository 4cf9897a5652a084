"""Pet record: the single managed entity."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PetRecord(BaseModel):
    """One pet. Frozen: a record never changes after it is created."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(ge=0)
    name: str
    category: str
    age: int = Field(ge=0)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # Naive timestamps on disk are taken to be UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def to_dict(self) -> dict:
        """Serialize to a JSON-ready dict."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> PetRecord:
        """Deserialize from a plain dict. Raises pydantic.ValidationError."""
        return cls.model_validate(data)
