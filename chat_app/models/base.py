from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModelSchema(BaseModel):
    """Base Pydantic model for entities and request schemas."""

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
    )


class BaseCreateSchema(BaseModelSchema):
    """Base schema for request bodies. Strings are stripped on input."""

    model_config = ConfigDict(str_strip_whitespace=True)


class BaseEntity(BaseModelSchema):
    """Stored entity carrying lifecycle timestamps."""

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def stamp(self, at: Optional[datetime] = None) -> None:
        """Set both timestamps, used once when the entity is first stored."""
        at = at or utc_now()
        self.created_at = at
        self.updated_at = at

    def touch(self, at: Optional[datetime] = None) -> None:
        """Bump updated_at after a mutation."""
        self.updated_at = at or utc_now()

    def snapshot(self):
        """Detached copy handed out by read paths."""
        return self.model_copy(deep=True)
