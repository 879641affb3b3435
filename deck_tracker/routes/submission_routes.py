from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from deck_tracker.core.database import get_session
from deck_tracker.models.schema_utils import MAX_ID
from deck_tracker.models.submission_model import LookupRead, SubmissionCreate
from deck_tracker.services import submission_service

router = APIRouter()


# ==========================================
# SUBMIT A DECK
# ==========================================

@router.post("/submit")
def submit_deck(data: SubmissionCreate, session: Session = Depends(get_session)):
    """
    Record the deck a player is using at an event.
    Submitting again for the same event replaces the earlier deck.
    """
    result = submission_service.submit(session, data.event_id, data.player, data.deck)
    return {"message": result["message"]}


# ==========================================
# LOOK UP A PLAYER'S DECK
# ==========================================

@router.get("/lookup", response_model=LookupRead)
def lookup_deck(
    event: int = Query(..., ge=1, le=MAX_ID, description="ID of the event"),
    player: str = Query(..., description="Player name (case-insensitive)"),
    session: Session = Depends(get_session),
):
    """
    Example: /lookup?event=1&player=alice
    404 when the player has not submitted for that event.
    """
    return submission_service.lookup(session, event, player)
