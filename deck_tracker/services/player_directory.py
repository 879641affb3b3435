# deck_tracker/services/player_directory.py
# Resolves display names to player identities, creating players on first sight.
#
# Uniqueness lives in the store: Player.name_key is a UNIQUE casefolded name,
# and creation is a single INSERT .. ON CONFLICT DO NOTHING followed by a
# re-lookup. Two concurrent first-time submissions for the same name end up
# with the same player instead of two.
#
# Resolve functions flush but do not commit; the calling operation owns the
# transaction.

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete
from sqlmodel import Session, col, select

from deck_tracker.core.batching import chunked
from deck_tracker.core.database import dialect_insert
from deck_tracker.core.errors import InputError, NotFoundError
from deck_tracker.core.time_utils import utc_now
from deck_tracker.models.player_model import Player, name_key_for
from deck_tracker.models.submission_model import Submission
from deck_tracker.models.validation_model import ValidationMembership

logger = logging.getLogger(__name__)

# Keeps IN (...) lists and multi-row INSERTs under store-side parameter limits
PLAYER_BATCH_SIZE = 500


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InputError("Player name is required.")
    return cleaned


def _insert_missing(session: Session, rows: List[dict]) -> None:
    """Create-if-absent keyed by name_key; existing players are left untouched."""
    if not rows:
        return
    stmt = dialect_insert(session, Player).values(rows).on_conflict_do_nothing(
        index_elements=["name_key"]
    )
    session.execute(stmt)


def find_player(session: Session, name: str) -> Optional[Player]:
    """Exact-name lookup, then case-insensitive lookup. Never creates."""
    cleaned = _clean_name(name)
    player = session.exec(select(Player).where(Player.name == cleaned)).first()
    if player is not None:
        return player
    return session.exec(select(Player).where(Player.name_key == name_key_for(cleaned))).first()


def resolve_or_create(session: Session, name: str) -> Player:
    """
    Return the player for `name`, creating one with the trimmed name
    (caller casing preserved) when neither an exact nor a case-insensitive
    match exists.
    """
    cleaned = _clean_name(name)
    player = find_player(session, cleaned)
    if player is not None:
        return player

    key = name_key_for(cleaned)
    _insert_missing(session, [{"name": cleaned, "name_key": key, "created_at": utc_now()}])
    # Re-read: if another request won the insert race we get its row
    player = session.exec(select(Player).where(Player.name_key == key)).one()
    logger.info("Resolved new name '%s' to player %s", cleaned, player.id)
    return player


def resolve_or_create_many(session: Session, names: Iterable[str]) -> Dict[str, Player]:
    """
    Batch form of resolve_or_create used by roster imports.

    Returns a mapping of each trimmed, non-blank input name to its player.
    Names differing only by case share one player; when that player is
    created here, the first such name in input order supplies its casing.
    """
    unique_names = list(dict.fromkeys(n.strip() for n in names if n and n.strip()))
    resolved: Dict[str, Player] = {}
    created = 0

    for batch in chunked(unique_names, PLAYER_BATCH_SIZE):
        first_by_key: Dict[str, str] = {}
        for name in batch:
            first_by_key.setdefault(name_key_for(name), name)

        existing_keys = set(session.exec(
            select(Player.name_key).where(col(Player.name_key).in_(list(first_by_key)))
        ).all())
        now = utc_now()
        rows = [
            {"name": name, "name_key": key, "created_at": now}
            for key, name in first_by_key.items()
            if key not in existing_keys
        ]
        _insert_missing(session, rows)
        created += len(rows)

        by_key = {
            p.name_key: p
            for p in session.exec(select(Player).where(col(Player.name_key).in_(list(first_by_key)))).all()
        }
        for name in batch:
            player = by_key.get(name_key_for(name))
            if player is not None:
                resolved[name] = player

    logger.info("Resolved %d roster names (%d new players)", len(resolved), created)
    return resolved


# ==========================================
# ADMIN: direct player management
# ==========================================

def list_players(session: Session) -> List[Player]:
    return list(session.exec(select(Player).order_by(Player.name_key, Player.id)).all())


def get_player(session: Session, player_id: int) -> Player:
    player = session.get(Player, player_id)
    if not player:
        raise NotFoundError(f"Player {player_id} not found.")
    return player


def rename_player(session: Session, player_id: int, new_name: str) -> Player:
    """Rename a player. A name that collides (case-insensitively) with another player is rejected."""
    player = get_player(session, player_id)
    cleaned = _clean_name(new_name)
    key = name_key_for(cleaned)

    clash = session.exec(
        select(Player).where(Player.name_key == key, Player.id != player_id)
    ).first()
    if clash:
        raise InputError(f"A player named '{clash.name}' already exists.")

    old_name = player.name
    player.name = cleaned
    player.name_key = key
    session.add(player)
    session.commit()
    session.refresh(player)
    logger.info("Renamed player %s: '%s' -> '%s'", player_id, old_name, cleaned)
    return player


def delete_player(session: Session, player_id: int) -> None:
    """Delete a player together with their submissions and roster memberships."""
    player = get_player(session, player_id)
    name = player.name
    session.execute(delete(Submission).where(Submission.player_id == player_id))
    session.execute(delete(ValidationMembership).where(ValidationMembership.player_id == player_id))
    session.delete(player)
    session.commit()
    logger.info("Deleted player %s ('%s')", player_id, name)
