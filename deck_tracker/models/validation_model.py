# deck_tracker/models/validation_model.py
# Per-event participant allowlist ("validation roster").
#
# A ValidationRoster row switches its event into the Restricted state;
# ValidationMembership lists the players allowed to submit while it is.

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel
from sqlmodel import SQLModel, Field

from deck_tracker.core.time_utils import utc_now

DEFAULT_ROSTER_FILENAME = "roster.csv"


class GateState(str, Enum):
    """Validation state of an event"""
    OPEN = "open"              # No roster, anyone may submit
    RESTRICTED = "restricted"  # Only roster members may submit


class ValidationRoster(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="event.id", unique=True)
    source_label: str
    created_at: datetime = Field(default_factory=utc_now)


class ValidationMembership(SQLModel, table=True):
    event_id: int = Field(foreign_key="event.id", primary_key=True)
    player_id: int = Field(foreign_key="player.id", primary_key=True, index=True)


# -------------------------------
# Pydantic schemas
# -------------------------------

class RosterImportRequest(BaseModel):
    """Body of the roster import endpoint; csv is the raw file text."""
    filename: Optional[str] = None
    csv: str


class RosterStatusRead(BaseModel):
    enabled: bool
    count: int
    source_filename: Optional[str] = None
    created_at: Optional[datetime] = None


class RosterImportRead(BaseModel):
    ok: bool
    count: int
    filename: str
