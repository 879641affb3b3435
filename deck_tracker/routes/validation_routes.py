# deck_tracker/routes/validation_routes.py
# Admin endpoints for an event's validation roster (participant allowlist).

from fastapi import APIRouter, Depends
from sqlmodel import Session

from deck_tracker.core.admin_auth import require_admin
from deck_tracker.core.database import get_session
from deck_tracker.models.validation_model import RosterImportRead, RosterImportRequest, RosterStatusRead
from deck_tracker.routes.params import EntityId
from deck_tracker.services.allowlist_service import import_roster
from deck_tracker.services.event_service import get_event
from deck_tracker.services.validation_gate import clear_roster, roster_status

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/{event_id}/validation", response_model=RosterStatusRead)
def get_validation_status(event_id: EntityId, session: Session = Depends(get_session)):
    """Whether the event is restricted to a roster, and how many players are on it."""
    get_event(session, event_id)
    return roster_status(session, event_id)


@router.post("/{event_id}/validation/import", response_model=RosterImportRead)
def import_validation_roster(event_id: EntityId, data: RosterImportRequest, session: Session = Depends(get_session)):
    """
    Replace the event's roster with the names in `csv` (one per line).
    Players not on the new roster lose access immediately.
    """
    result = import_roster(session, event_id, data.csv, data.filename)
    return {"ok": True, "count": result["accepted_count"], "filename": result["source_label"]}


@router.delete("/{event_id}/validation")
def delete_validation_roster(event_id: EntityId, session: Session = Depends(get_session)):
    """Drop the roster; the event accepts submissions from anyone again."""
    get_event(session, event_id)
    cleared = clear_roster(session, event_id)
    return {"ok": True, "cleared": cleared}
