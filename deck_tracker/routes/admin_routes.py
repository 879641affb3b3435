# deck_tracker/routes/admin_routes.py
# Admin panel API: login/logout, events, entries and players.

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from deck_tracker.core.admin_auth import (
    ADMIN_COOKIE_NAME, AdminSessionAuthenticator, get_authenticator, require_admin
)
from deck_tracker.core.database import get_session
from deck_tracker.models.admin_model import AdminLogin
from deck_tracker.models.event_model import EventRead, EventWrite
from deck_tracker.models.player_model import PlayerRead, PlayerRename
from deck_tracker.models.submission_model import EntryRead, EntryUpdate
from deck_tracker.routes.params import EntityId
from deck_tracker.services import event_service, player_directory, submission_service

# Login/logout are reachable without a credential
auth_router = APIRouter()
router = APIRouter(dependencies=[Depends(require_admin)])


# ==========================================
# LOGIN / LOGOUT
# ==========================================

@auth_router.post("/login")
def admin_login(
    data: AdminLogin,
    response: Response,
    authenticator: AdminSessionAuthenticator = Depends(get_authenticator),
):
    token = authenticator.login(data.password)
    response.set_cookie(
        ADMIN_COOKIE_NAME,
        token,
        max_age=authenticator.ttl_seconds,
        httponly=True,
        samesite="lax",
    )
    return {"ok": True}


@auth_router.post("/logout")
def admin_logout(response: Response):
    response.delete_cookie(ADMIN_COOKIE_NAME)
    return {"ok": True}


# ==========================================
# EVENTS
# ==========================================

@router.get("/events", response_model=List[EventRead])
def admin_list_events(session: Session = Depends(get_session)):
    return event_service.list_events(session)


@router.post("/events", response_model=EventRead)
def admin_create_event(data: EventWrite, session: Session = Depends(get_session)):
    return event_service.create_event(session, data.name)


@router.patch("/events/{event_id}", response_model=EventRead)
def admin_rename_event(event_id: EntityId, data: EventWrite, session: Session = Depends(get_session)):
    return event_service.rename_event(session, event_id, data.name)


# ==========================================
# ENTRIES (submissions)
# ==========================================

@router.get("/events/{event_id}/entries", response_model=List[EntryRead])
def admin_list_entries(event_id: EntityId, session: Session = Depends(get_session)):
    """All submissions for an event, newest first."""
    return submission_service.list_entries(session, event_id)


@router.patch("/entries/{entry_id}", response_model=EntryRead)
def admin_update_entry(entry_id: EntityId, data: EntryUpdate, session: Session = Depends(get_session)):
    """Correct the player and/or deck of one submission."""
    return submission_service.update_entry(session, entry_id, data.player, data.deck)


@router.delete("/entries/{entry_id}")
def admin_delete_entry(entry_id: EntityId, session: Session = Depends(get_session)):
    submission_service.delete_entry(session, entry_id)
    return {"ok": True}


# ==========================================
# PLAYERS
# ==========================================

@router.get("/players", response_model=List[PlayerRead])
def admin_list_players(session: Session = Depends(get_session)):
    return player_directory.list_players(session)


@router.patch("/players/{player_id}", response_model=PlayerRead)
def admin_rename_player(player_id: EntityId, data: PlayerRename, session: Session = Depends(get_session)):
    return player_directory.rename_player(session, player_id, data.name)


@router.delete("/players/{player_id}")
def admin_delete_player(player_id: EntityId, session: Session = Depends(get_session)):
    """Remove a player along with their submissions and roster memberships."""
    player_directory.delete_player(session, player_id)
    return {"ok": True}
