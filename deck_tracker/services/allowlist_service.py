# deck_tracker/services/allowlist_service.py
# Replaces an event's validation roster from uploaded roster text.
#
# Steps, all inside ONE transaction:
#   1. resolve-or-create every roster name
#   2. delete the event's current membership set
#   3. insert the new membership set (batched)
#   4. upsert the roster row (source label + fresh timestamp)
# Any failure rolls the whole import back, so the previous allowlist (or the
# open state) stays in effect and the error propagates to the caller.

import logging
from typing import Optional

from sqlalchemy import delete, insert
from sqlmodel import Session

from deck_tracker.core.batching import chunked
from deck_tracker.core.database import dialect_insert
from deck_tracker.core.errors import NotFoundError
from deck_tracker.core.time_utils import utc_now
from deck_tracker.models.event_model import Event
from deck_tracker.models.validation_model import (
    DEFAULT_ROSTER_FILENAME, ValidationMembership, ValidationRoster
)
from deck_tracker.services.player_directory import resolve_or_create_many
from deck_tracker.services.roster_parser import parse_roster

logger = logging.getLogger(__name__)

MEMBERSHIP_BATCH_SIZE = 1000


def _upsert_roster(session: Session, event_id: int, source_label: str) -> None:
    now = utc_now()
    stmt = dialect_insert(session, ValidationRoster).values(
        event_id=event_id, source_label=source_label, created_at=now
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["event_id"],
        set_={"source_label": source_label, "created_at": now},
    )
    session.execute(stmt)


def import_roster(session: Session, event_id: int, raw_text: str, source_label: Optional[str] = None) -> dict:
    """
    Publish a new allowlist for the event and switch it to the restricted state.

    Returns {"accepted_count", "source_label"}; accepted_count is the number of
    membership rows written, i.e. distinct players the roster resolved to.
    """
    if not session.get(Event, event_id):
        raise NotFoundError(f"Event {event_id} not found.")

    label = (source_label or "").strip() or DEFAULT_ROSTER_FILENAME
    names = parse_roster(raw_text)

    try:
        players = resolve_or_create_many(session, names)

        session.execute(delete(ValidationMembership).where(ValidationMembership.event_id == event_id))

        # Case variants of one name resolve to the same player; one row each
        player_ids = list(dict.fromkeys(player.id for player in players.values()))
        for batch in chunked(player_ids, MEMBERSHIP_BATCH_SIZE):
            session.execute(
                insert(ValidationMembership).values(
                    [{"event_id": event_id, "player_id": player_id} for player_id in batch]
                )
            )

        _upsert_roster(session, event_id, label)
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Roster import for event %s failed; previous allowlist kept", event_id)
        raise

    logger.info(
        "Imported roster '%s' for event %s: %d names parsed, %d players allowed",
        label, event_id, len(names), len(player_ids),
    )
    return {"accepted_count": len(player_ids), "source_label": label}
