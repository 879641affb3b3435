# deck_tracker/services/submission_service.py
# Records which deck a player uses at an event.
#
# One live submission per (event, player): recording is a single
# INSERT .. ON CONFLICT DO UPDATE, so a resubmission replaces the deck and
# timestamp and concurrent resubmissions resolve as last-write-wins.

import logging
from typing import List, Optional

from fastapi import status
from sqlmodel import Session, col, select

from deck_tracker.core.database import dialect_insert
from deck_tracker.core.errors import GateRejectedError, InputError, NotFoundError
from deck_tracker.core.time_utils import utc_now
from deck_tracker.models.deck_model import Deck
from deck_tracker.models.player_model import Player, name_key_for
from deck_tracker.models.submission_model import Submission
from deck_tracker.services.event_service import get_event
from deck_tracker.services.player_directory import find_player, resolve_or_create
from deck_tracker.services.validation_gate import authorize

logger = logging.getLogger(__name__)

NO_INFORMATION = "No information on player deck yet."


def find_deck(session: Session, name: str) -> Optional[Deck]:
    """Case-insensitive deck match on the casefolded key. Decks are never created here."""
    return session.exec(select(Deck).where(Deck.name_key == name_key_for(name))).first()


def record_submission(session: Session, event_id: int, player_id: int, deck_id: int) -> Submission:
    """
    Upsert the (event, player) submission with `deck_id` and a fresh timestamp.
    Callers have already checked the event, player, deck and validation gate.
    """
    now = utc_now()
    stmt = dialect_insert(session, Submission).values(
        event_id=event_id, player_id=player_id, deck_id=deck_id, created_at=now
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["event_id", "player_id"],
        set_={"deck_id": deck_id, "created_at": now},
    )
    session.execute(stmt)
    session.commit()
    return session.exec(
        select(Submission).where(Submission.event_id == event_id, Submission.player_id == player_id)
    ).one()


def submit(session: Session, event_id: int, player_name: str, deck_name: str) -> dict:
    """
    Public submission flow: event and deck must exist, the player is resolved
    (or created), the validation gate is consulted, then the deck is recorded.
    Unknown event/deck are reported as 400 on this path.
    """
    event = get_event(session, event_id, status_code=status.HTTP_400_BAD_REQUEST)
    deck = find_deck(session, deck_name)
    if deck is None:
        raise NotFoundError(f"Deck '{deck_name.strip()}' not found.", status_code=status.HTTP_400_BAD_REQUEST)

    player = resolve_or_create(session, player_name)
    player_label, deck_label, event_label = player.name, deck.name, event.name

    if not authorize(session, event_id, player.id):
        # Drop a player row created for this rejected attempt
        session.rollback()
        logger.info("Gate rejected '%s' for event %s", player_label, event_id)
        raise GateRejectedError(f"{player_label} is not registered for {event_label}.")

    submission = record_submission(session, event_id, player.id, deck.id)
    logger.info(
        "Recorded deck '%s' for '%s' at event %s (submission %s)",
        deck_label, player_label, event_id, submission.id,
    )
    return {"message": f"Submission recorded for {player_label} using {deck_label}."}


def lookup(session: Session, event_id: int, player_name: str) -> dict:
    """The deck a player registered for an event."""
    get_event(session, event_id)
    player = find_player(session, player_name)
    if player is None:
        raise NotFoundError(NO_INFORMATION)

    submission = session.exec(
        select(Submission).where(Submission.event_id == event_id, Submission.player_id == player.id)
    ).first()
    deck = session.get(Deck, submission.deck_id) if submission else None
    if deck is None:
        raise NotFoundError(NO_INFORMATION)

    return {"player": player.name, "deck": deck.name, "created_at": submission.created_at}


# ==========================================
# ADMIN: entry management
# ==========================================

def _entry_row(session: Session, submission: Submission) -> dict:
    player = session.get(Player, submission.player_id)
    deck = session.get(Deck, submission.deck_id)
    return {
        "id": submission.id,
        "created_at": submission.created_at,
        "player": player.name if player else None,
        "deck": deck.name if deck else None,
    }


def list_entries(session: Session, event_id: int) -> List[dict]:
    """All submissions for an event, newest first."""
    get_event(session, event_id)
    rows = session.exec(
        select(Submission, Player.name, Deck.name)
        .join(Player, Player.id == Submission.player_id)
        .join(Deck, Deck.id == Submission.deck_id, isouter=True)
        .where(Submission.event_id == event_id)
        .order_by(col(Submission.created_at).desc(), col(Submission.id).desc())
    ).all()
    return [
        {"id": sub.id, "created_at": sub.created_at, "player": player_name, "deck": deck_name}
        for sub, player_name, deck_name in rows
    ]


def get_entry(session: Session, entry_id: int) -> Submission:
    submission = session.get(Submission, entry_id)
    if not submission:
        raise NotFoundError(f"Entry {entry_id} not found.")
    return submission


def update_entry(
    session: Session,
    entry_id: int,
    player_name: Optional[str] = None,
    deck_name: Optional[str] = None,
) -> dict:
    """
    Admin correction of one submission. The validation gate is not applied.
    Moving an entry onto a player who already has one for the event is rejected.
    """
    submission = get_entry(session, entry_id)

    if deck_name is not None:
        deck = find_deck(session, deck_name)
        if deck is None:
            raise NotFoundError(f"Deck '{deck_name.strip()}' not found.")
        submission.deck_id = deck.id

    if player_name is not None:
        player = resolve_or_create(session, player_name)
        if player.id != submission.player_id:
            clash = session.exec(
                select(Submission).where(
                    Submission.event_id == submission.event_id,
                    Submission.player_id == player.id,
                )
            ).first()
            if clash:
                raise InputError(f"{player.name} already has an entry for this event.")
            submission.player_id = player.id

    session.add(submission)
    session.commit()
    session.refresh(submission)
    logger.info("Entry %s updated by admin", entry_id)
    return _entry_row(session, submission)


def delete_entry(session: Session, entry_id: int) -> None:
    submission = get_entry(session, entry_id)
    session.delete(submission)
    session.commit()
    logger.info("Entry %s deleted by admin", entry_id)
