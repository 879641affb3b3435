# deck_tracker/services/validation_gate.py
# Per-event validation gate.
#
#   OPEN        no ValidationRoster row     -> every player may submit
#   RESTRICTED  a ValidationRoster row      -> only ValidationMembership players
#
# OPEN -> RESTRICTED happens only through a roster import
# (services/allowlist_service.py). clear_roster() goes back to OPEN.

import logging

from sqlalchemy import delete, func
from sqlmodel import Session, select

from deck_tracker.models.validation_model import GateState, ValidationMembership, ValidationRoster

logger = logging.getLogger(__name__)


def get_roster(session: Session, event_id: int):
    return session.exec(select(ValidationRoster).where(ValidationRoster.event_id == event_id)).first()


def gate_state(session: Session, event_id: int) -> GateState:
    return GateState.RESTRICTED if get_roster(session, event_id) else GateState.OPEN


def authorize(session: Session, event_id: int, player_id: int) -> bool:
    """
    True if the player may submit for the event.
    Open events accept everyone; restricted events only roster members.
    """
    if gate_state(session, event_id) is GateState.OPEN:
        return True
    membership = session.get(ValidationMembership, (event_id, player_id))
    return membership is not None


def member_count(session: Session, event_id: int) -> int:
    return session.exec(
        select(func.count()).select_from(ValidationMembership).where(ValidationMembership.event_id == event_id)
    ).one()


def roster_status(session: Session, event_id: int) -> dict:
    """Shape used by the admin validation panel."""
    roster = get_roster(session, event_id)
    if roster is None:
        return {"enabled": False, "count": 0, "source_filename": None, "created_at": None}
    return {
        "enabled": True,
        "count": member_count(session, event_id),
        "source_filename": roster.source_label,
        "created_at": roster.created_at,
    }


def clear_roster(session: Session, event_id: int) -> bool:
    """
    Delete the roster and its membership set (RESTRICTED -> OPEN).
    Returns False when the event was already open.
    """
    roster = get_roster(session, event_id)
    session.execute(delete(ValidationMembership).where(ValidationMembership.event_id == event_id))
    if roster is not None:
        session.delete(roster)
    session.commit()

    if roster is None:
        return False
    logger.info("Validation roster cleared for event %s; event is open again", event_id)
    return True
