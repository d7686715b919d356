from dataclasses import replace
from datetime import timedelta

from srs_engine.fsrs import CardStatus, create_card, get_retention, review_card
from srs_engine.queue import (
    build_review_session,
    fill_in_order,
    get_due_cards,
    is_due_for_review,
    sort_by_review_priority,
)


def _reviewed_card(now, response, days_ago):
    """A card that graduated to Review and was last reviewed days_ago."""
    start = now - timedelta(days=days_ago)
    card = review_card(create_card(start), "good", start).card
    return review_card(card, response, start + timedelta(minutes=10)).card


def test_decayed_card_sorts_before_new_card(now):
    fresh = create_card(now)
    reviewed = _reviewed_card(now, "easy", days_ago=1)

    ordered = sort_by_review_priority([fresh, reviewed], now)

    # New cards have retention 1.0; the reviewed card decayed below it
    assert get_retention(reviewed, now) < 1.0
    assert ordered[0] is reviewed
    assert ordered[1] is fresh


def test_lowest_retention_first(now):
    recent = _reviewed_card(now, "good", days_ago=1)
    stale = _reviewed_card(now, "good", days_ago=20)

    assert sort_by_review_priority([recent, stale], now) == [stale, recent]


def test_ties_broken_by_due(now):
    early = replace(create_card(now), due=now - timedelta(days=2))
    late = replace(create_card(now), due=now - timedelta(days=1))

    assert sort_by_review_priority([late, early], now) == [early, late]


def test_sort_is_idempotent_and_pure(now):
    cards = [
        _reviewed_card(now, "hard", days_ago=3),
        create_card(now),
        _reviewed_card(now, "good", days_ago=9),
        _reviewed_card(now, "easy", days_ago=9),
    ]
    original = list(cards)

    once = sort_by_review_priority(cards, now)

    assert sort_by_review_priority(once, now) == once
    assert cards == original


def test_new_cards_always_due(now):
    future_new = replace(create_card(now), due=now + timedelta(days=5))
    assert is_due_for_review(future_new, now)


def test_get_due_cards_excludes_future(now):
    due = _reviewed_card(now, "good", days_ago=10)
    not_yet = _reviewed_card(now, "easy", days_ago=0)
    fresh = create_card(now)

    result = get_due_cards([not_yet, fresh, due], now)

    assert not_yet not in result
    assert result == [due, fresh]


def test_fill_in_order_respects_limits():
    pools = {"a": [1, 2, 3], "b": [4, 5]}
    assert fill_in_order(pools, ["a", "b"], {"a": 2, "b": 5}) == [1, 2, 4, 5]
    assert fill_in_order(pools, ["b", "a"], {"a": 1, "b": 0}) == [1]
    assert fill_in_order(pools, ["c"], {"c": 3}) == []


def test_build_review_session(now):
    due_cards = [_reviewed_card(now, "good", days_ago=d) for d in (5, 30, 12)]
    new_cards = [create_card(now - timedelta(minutes=m)) for m in range(4)]
    waiting = _reviewed_card(now, "easy", days_ago=0)

    collection = due_cards + [waiting] + new_cards

    session = build_review_session(collection, now, max_reviews=2, max_new=3)

    assert len(session) == 5
    assert session[:2] == sort_by_review_priority(due_cards, now)[:2]
    assert session[2:] == new_cards[:3]
    assert all(card.status == CardStatus.NEW for card in session[2:])
