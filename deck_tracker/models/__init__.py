# deck_tracker/models/__init__.py
# Centralized imports for all database models and schemas

# Admin
from .admin_model import AdminLogin

# Player
from .player_model import Player, PlayerRead, PlayerRename, name_key_for

# Deck
from .deck_model import Deck

# Event
from .event_model import Event, EventRead, EventWrite

# Submissions
from .submission_model import Submission, SubmissionCreate, LookupRead, EntryRead, EntryUpdate

# Validation roster
from .validation_model import (
    GateState, ValidationRoster, ValidationMembership,
    RosterImportRequest, RosterStatusRead, RosterImportRead, DEFAULT_ROSTER_FILENAME
)
