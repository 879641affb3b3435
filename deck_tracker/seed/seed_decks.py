"""
seed_decks.py
-------------
Seeds the deck list. Decks are a closed set: players can only submit decks
that exist here.

Supports "delta seeding": only missing decks are inserted, so it is safe to
run repeatedly or after adding names to DEFAULT_DECKS.

Usage:
    python -m deck_tracker.seed.seed_decks
"""

import logging
from typing import Iterable, Optional

from sqlmodel import Session, select

from deck_tracker.core.database import get_sync_session, init_db
from deck_tracker.models.deck_model import Deck
from deck_tracker.models.schema_utils import name_key_for

logger = logging.getLogger(__name__)

DEFAULT_DECKS = ["Fire Deck", "Water Deck", "Earth Deck", "Air Deck"]


def seed_decks(session: Optional[Session] = None, names: Iterable[str] = DEFAULT_DECKS) -> int:
    """Insert missing decks; returns how many were added."""
    own_session = session is None
    session = session or get_sync_session()
    try:
        existing = set(session.exec(select(Deck.name_key)).all())
        added = 0
        for name in names:
            key = name_key_for(name)
            if key in existing:
                continue
            session.add(Deck(name=name.strip(), name_key=key))
            existing.add(key)
            added += 1
        session.commit()
    finally:
        if own_session:
            session.close()

    if added:
        logger.info("Seeded %d decks", added)
    return added


def decks_missing(session: Session) -> bool:
    return session.exec(select(Deck)).first() is None


if __name__ == "__main__":
    from deck_tracker.core.config import get_settings
    from deck_tracker.core.logging_config import setup_logging

    setup_logging(get_settings().log_level)
    init_db()
    seed_decks()
