# deck_tracker/models/player_model.py
# Defines the Player identity and its API schemas.

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator
from sqlmodel import SQLModel, Field

from deck_tracker.core.time_utils import utc_now
from deck_tracker.models.schema_utils import name_key_for, require_text


class Player(SQLModel, table=True):
    """A participant, identified by display name."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    # One player per case-insensitive name; resolve-or-create relies on this
    name_key: str = Field(unique=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)


# -------------------------------
# Pydantic schemas for API requests/responses
# -------------------------------

class PlayerRead(BaseModel):
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class PlayerRename(BaseModel):
    """Schema for renaming a player from the admin panel."""
    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return require_text(value)
