# deck_tracker/services/summary_service.py
# Deck-usage breakdown for an event.

from sqlalchemy import func
from sqlmodel import Session, select

from deck_tracker.models.deck_model import Deck
from deck_tracker.models.submission_model import Submission
from deck_tracker.services.event_service import get_event


def summarize(session: Session, event_id: int) -> dict:
    """
    Count submissions per deck for an event.

    `total` counts every submission for the event. Submissions whose deck no
    longer exists still count toward `total` but are left out of `decks`.
    Decks are ordered by count (descending), ties by name in code-point order.
    """
    get_event(session, event_id)

    total = session.exec(
        select(func.count()).select_from(Submission).where(Submission.event_id == event_id)
    ).one()

    rows = session.exec(
        select(Deck.name, func.count(Submission.id))
        .select_from(Submission)
        .join(Deck, Deck.id == Submission.deck_id)
        .where(Submission.event_id == event_id)
        .group_by(Deck.name)
    ).all()

    # Sorted here rather than in SQL so name order does not depend on DB collation
    decks = sorted(
        ({"name": name, "count": count} for name, count in rows),
        key=lambda d: (-d["count"], d["name"]),
    )
    return {"total": total, "decks": decks}
