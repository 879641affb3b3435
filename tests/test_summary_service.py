import pytest

from deck_tracker.core.errors import NotFoundError
from deck_tracker.seed.seed_decks import seed_decks
from deck_tracker.services.player_directory import resolve_or_create
from deck_tracker.services.submission_service import find_deck, record_submission
from deck_tracker.services.summary_service import summarize


def _record(session, event_id, counts):
    n = 0
    for deck_name, count in counts.items():
        deck = find_deck(session, deck_name)
        for _ in range(count):
            n += 1
            player = resolve_or_create(session, f"player-{n}")
            record_submission(session, event_id, player.id, deck.id)


def test_counts_ordered_by_count_then_name(session, event):
    seed_decks(session, ["B", "C", "A"])
    _record(session, event.id, {"C": 1, "B": 3, "A": 3})

    assert summarize(session, event.id) == {
        "total": 7,
        "decks": [{"name": "A", "count": 3}, {"name": "B", "count": 3}, {"name": "C", "count": 1}],
    }


def test_tie_break_is_case_sensitive(session, event):
    seed_decks(session, ["apple", "Banana"])
    _record(session, event.id, {"apple": 2, "Banana": 2})

    names = [d["name"] for d in summarize(session, event.id)["decks"]]
    assert names == ["Banana", "apple"]


def test_unresolvable_deck_counts_toward_total_only(session, event, decks):
    _record(session, event.id, {"Fire Deck": 2})
    ghost = resolve_or_create(session, "Ghost")
    record_submission(session, event.id, ghost.id, 9999)

    summary = summarize(session, event.id)

    assert summary["total"] == 3
    assert summary["decks"] == [{"name": "Fire Deck", "count": 2}]


def test_empty_event(session, event):
    assert summarize(session, event.id) == {"total": 0, "decks": []}


def test_unknown_event(session):
    with pytest.raises(NotFoundError):
        summarize(session, 12345)
