# deck_tracker/services/event_service.py
# Event lookups and admin event management.

import logging
from typing import List

from sqlmodel import Session, col, select

from deck_tracker.core.errors import NotFoundError
from deck_tracker.models.event_model import Event

logger = logging.getLogger(__name__)


def get_event(session: Session, event_id: int, status_code: int = None) -> Event:
    """Fetch an event or raise NotFoundError (optionally with a different status)."""
    event = session.get(Event, event_id)
    if not event:
        raise NotFoundError(f"Event {event_id} not found.", status_code=status_code)
    return event


def list_events(session: Session) -> List[Event]:
    """Newest events first."""
    return list(session.exec(
        select(Event).order_by(col(Event.created_at).desc(), col(Event.id).desc())
    ).all())


def create_event(session: Session, name: str) -> Event:
    event = Event(name=name.strip())
    session.add(event)
    session.commit()
    session.refresh(event)
    logger.info("Created event %s ('%s')", event.id, event.name)
    return event


def rename_event(session: Session, event_id: int, name: str) -> Event:
    event = get_event(session, event_id)
    event.name = name.strip()
    session.add(event)
    session.commit()
    session.refresh(event)
    logger.info("Renamed event %s to '%s'", event_id, event.name)
    return event
