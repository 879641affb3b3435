# deck_tracker/models/submission_model.py
# Defines deck submissions: one live row per (event, player).

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, conint, field_validator, model_validator
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field

from deck_tracker.core.time_utils import utc_now
from deck_tracker.models.schema_utils import MAX_ID, optional_text, require_text


class Submission(SQLModel, table=True):
    """
    The deck a player registered for an event.
    A resubmission overwrites deck_id and created_at; no history is kept.
    """
    __table_args__ = (UniqueConstraint("event_id", "player_id", name="uq_submission_event_player"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="event.id", index=True)
    player_id: int = Field(foreign_key="player.id", index=True)
    deck_id: int = Field(foreign_key="deck.id")
    created_at: datetime = Field(default_factory=utc_now)


# -------------------------------
# Pydantic schemas
# -------------------------------

class SubmissionCreate(BaseModel):
    """Body of POST /submit."""
    event_id: conint(ge=1, le=MAX_ID)
    player: str
    deck: str

    @field_validator("player", "deck")
    @classmethod
    def check_text(cls, value: str) -> str:
        return require_text(value)


class LookupRead(BaseModel):
    player: str
    deck: str
    created_at: datetime


class EntryRead(BaseModel):
    """A submission as shown in the admin entry list."""
    id: int
    created_at: datetime
    player: str
    deck: Optional[str] = None


class EntryUpdate(BaseModel):
    """Admin edit of one submission; at least one field is required."""
    player: Optional[str] = None
    deck: Optional[str] = None

    @field_validator("player", "deck")
    @classmethod
    def check_text(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)

    @model_validator(mode="after")
    def require_one_field(self):
        if self.player is None and self.deck is None:
            raise ValueError("player or deck is required")
        return self
