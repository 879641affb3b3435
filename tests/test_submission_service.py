from datetime import timezone

import pytest
from sqlmodel import select

from deck_tracker.core.errors import GateRejectedError, InputError, NotFoundError
from deck_tracker.core.time_utils import utc_now
from deck_tracker.models import Deck, Player, Submission
from deck_tracker.seed.seed_decks import seed_decks
from deck_tracker.services.allowlist_service import import_roster
from deck_tracker.services.player_directory import find_player
from deck_tracker.services.submission_service import (
    delete_entry, list_entries, lookup, submit, update_entry
)


def _as_utc(value):
    # SQLite hands back naive values on older sqlmodel releases
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def test_timestamps_are_utc(session, event, decks):
    before = utc_now()
    assert before.tzinfo is timezone.utc

    submit(session, event.id, "Alice", "Fire Deck")
    recorded = session.exec(select(Submission)).one()

    assert _as_utc(recorded.created_at) >= before
    assert _as_utc(event.created_at) <= _as_utc(recorded.created_at)


def test_submit_records_deck(session, event, decks):
    result = submit(session, event.id, "Alice", "Fire Deck")

    assert result["message"] == "Submission recorded for Alice using Fire Deck."
    assert lookup(session, event.id, "Alice")["deck"] == "Fire Deck"


def test_resubmission_replaces_previous_deck(session, event, decks):
    submit(session, event.id, "Alice", "Fire Deck")
    first = session.exec(select(Submission)).one()
    first_id, first_ts = first.id, first.created_at

    submit(session, event.id, "alice", "Water Deck")
    session.expire_all()

    rows = session.exec(select(Submission)).all()
    assert len(rows) == 1
    assert rows[0].id == first_id
    assert rows[0].deck_id == decks["Water Deck"].id
    assert _as_utc(rows[0].created_at) >= _as_utc(first_ts)
    assert len(session.exec(select(Player)).all()) == 1


def test_unknown_deck_is_rejected_not_created(session, event, decks):
    with pytest.raises(NotFoundError) as excinfo:
        submit(session, event.id, "Alice", "Shadow Deck")

    assert excinfo.value.status_code == 400
    assert session.exec(select(Deck).where(Deck.name == "Shadow Deck")).first() is None


def test_deck_name_matches_case_insensitively(session, event, decks):
    result = submit(session, event.id, "Alice", "fire deck")
    assert result["message"].endswith("using Fire Deck.")


def test_deck_name_matches_non_ascii_case(session, event, decks):
    seed_decks(session, ["\u00c9clair Deck", "Stra\u00dfe Deck"])

    assert submit(session, event.id, "Alice", "\u00e9CLAIR deck")["message"].endswith("using \u00c9clair Deck.")
    assert submit(session, event.id, "Bob", "STRASSE DECK")["message"].endswith("using Stra\u00dfe Deck.")


def test_seeding_skips_decks_differing_only_by_case(session, decks):
    assert seed_decks(session, ["FIRE DECK", "Ice Deck"]) == 1
    assert len(session.exec(select(Deck)).all()) == 5


def test_unknown_event_is_bad_request(session, decks):
    with pytest.raises(NotFoundError) as excinfo:
        submit(session, 404, "Alice", "Fire Deck")
    assert excinfo.value.status_code == 400


def test_gate_rejects_player_not_on_roster(session, event, decks):
    import_roster(session, event.id, "Alice", "roster.csv")

    with pytest.raises(GateRejectedError) as excinfo:
        submit(session, event.id, "Bob", "Fire Deck")

    assert excinfo.value.status_code == 400
    assert find_player(session, "Bob") is None
    assert submit(session, event.id, "ALICE", "Fire Deck")["message"].startswith("Submission recorded for Alice")


def test_lookup_without_submission(session, event, decks):
    submit(session, event.id, "Alice", "Fire Deck")

    with pytest.raises(NotFoundError, match="No information"):
        lookup(session, event.id, "Bob")


def test_lookup_is_per_event(session, make_event, decks):
    first, second = make_event("Week 1"), make_event("Week 2")
    submit(session, first.id, "Alice", "Fire Deck")
    submit(session, second.id, "Alice", "Air Deck")

    assert lookup(session, first.id, "alice")["deck"] == "Fire Deck"
    assert lookup(session, second.id, "alice")["deck"] == "Air Deck"


def test_list_entries(session, event, decks):
    submit(session, event.id, "Alice", "Fire Deck")
    submit(session, event.id, "Bob", "Earth Deck")

    entries = list_entries(session, event.id)

    assert {(e["player"], e["deck"]) for e in entries} == {("Alice", "Fire Deck"), ("Bob", "Earth Deck")}
    assert set(entries[0]) == {"id", "created_at", "player", "deck"}


def test_update_entry_changes_deck_and_player(session, event, decks):
    submit(session, event.id, "Alice", "Fire Deck")
    entry_id = session.exec(select(Submission)).one().id

    updated = update_entry(session, entry_id, player_name="Alicia", deck_name="Earth Deck")

    assert updated["player"] == "Alicia"
    assert updated["deck"] == "Earth Deck"


def test_update_entry_rejects_duplicate_player(session, event, decks):
    submit(session, event.id, "Alice", "Fire Deck")
    submit(session, event.id, "Bob", "Water Deck")
    bob_entry = session.exec(
        select(Submission).where(Submission.player_id == find_player(session, "Bob").id)
    ).one()

    with pytest.raises(InputError):
        update_entry(session, bob_entry.id, player_name="alice")


def test_update_entry_unknown_deck(session, event, decks):
    submit(session, event.id, "Alice", "Fire Deck")
    entry_id = session.exec(select(Submission)).one().id

    with pytest.raises(NotFoundError):
        update_entry(session, entry_id, deck_name="Nope")


def test_delete_entry(session, event, decks):
    submit(session, event.id, "Alice", "Fire Deck")
    entry_id = session.exec(select(Submission)).one().id

    delete_entry(session, entry_id)

    assert list_entries(session, event.id) == []
    with pytest.raises(NotFoundError):
        delete_entry(session, entry_id)
