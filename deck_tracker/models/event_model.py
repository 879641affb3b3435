# deck_tracker/models/event_model.py
# Defines tracked events. Events are created by administrators only.

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator
from sqlmodel import SQLModel, Field

from deck_tracker.core.time_utils import utc_now
from deck_tracker.models.schema_utils import require_text


class Event(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    created_at: datetime = Field(default_factory=utc_now)


class EventRead(BaseModel):
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class EventWrite(BaseModel):
    """Schema for creating or renaming an event."""
    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return require_text(value)
