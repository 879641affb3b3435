from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from deck_tracker.core.database import get_session
from deck_tracker.models.event_model import EventRead
from deck_tracker.routes.params import EntityId
from deck_tracker.services.event_service import list_events
from deck_tracker.services.summary_service import summarize

router = APIRouter()


@router.get("", response_model=List[EventRead])
def get_events(session: Session = Depends(get_session)):
    """List tracked events, newest first."""
    return list_events(session)


@router.get("/{event_id}/summary")
def get_event_summary(event_id: EntityId, session: Session = Depends(get_session)):
    """
    Deck usage for an event.
    Example: /events/1/summary -> {"total": 7, "decks": [{"name": "Fire Deck", "count": 3}, ...]}
    """
    return summarize(session, event_id)
