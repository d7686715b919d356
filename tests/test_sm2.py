from datetime import timedelta

import pytest

from srs_engine.fsrs import Response
from srs_engine.sm2 import (
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    LegacyCard,
    LegacyStatus,
    apply_review,
    calculate_average_ease_factor,
    calculate_next_review,
    calculate_retention_rate,
    create_legacy_card,
    estimate_session_duration,
    get_cards_for_review,
    get_new_cards,
    get_next_review_text,
    get_study_session,
    is_due_for_review,
    response_to_quality,
)


def _reviewed(repetitions, interval, ease=DEFAULT_EASE_FACTOR, status=LegacyStatus.REVIEW, **kwargs):
    return LegacyCard(
        ease_factor=ease,
        interval=interval,
        repetitions=repetitions,
        status=status,
        **kwargs,
    )


def test_create_legacy_card(now):
    card = create_legacy_card(now)
    assert card.ease_factor == 2.5
    assert card.interval == 0
    assert card.repetitions == 0
    assert card.status == LegacyStatus.NEW
    assert card.next_review == now
    assert card.created_at == now


@pytest.mark.parametrize(
    "response, quality",
    [("again", 0), ("hard", 2), ("good", 4), ("easy", 5), ("unknown", 3), (None, 3)],
)
def test_response_to_quality(response, quality):
    assert response_to_quality(response) == quality


@pytest.mark.parametrize("response, days", [("again", 0), ("hard", 1), ("good", 3), ("easy", 7)])
def test_new_card_first_intervals(legacy_card, now, response, days):
    result = calculate_next_review(legacy_card, response, now)
    assert result.interval == days
    assert result.ease_factor == DEFAULT_EASE_FACTOR
    assert result.next_review_date == now + timedelta(days=days)


def test_classic_interval_sequence(now):
    card = _reviewed(repetitions=0, interval=0, status=LegacyStatus.LEARNING)

    first = calculate_next_review(card, "good", now)
    assert first.interval == 1

    card = _reviewed(repetitions=1, interval=1, ease=first.ease_factor, status=LegacyStatus.LEARNING)
    second = calculate_next_review(card, "good", now)
    assert second.interval == 6

    card = _reviewed(repetitions=2, interval=6, ease=second.ease_factor)
    third = calculate_next_review(card, "good", now)
    assert third.interval == round(6 * third.ease_factor)
    assert third.repetitions == 3


def test_good_keeps_ease_factor(now):
    result = calculate_next_review(_reviewed(3, 10), "good", now)
    # q=4 is neutral in the SM-2 ease formula
    assert result.ease_factor == pytest.approx(2.5)


def test_hard_lowers_ease_factor(now):
    result = calculate_next_review(_reviewed(3, 10), "hard", now)
    assert result.ease_factor == pytest.approx(2.5 - 0.32 - 0.15)
    assert result.repetitions == 4


def test_again_resets(now):
    result = calculate_next_review(_reviewed(5, 40), "again", now)
    assert result.repetitions == 0
    assert result.interval == 1
    assert result.status == LegacyStatus.LEARNING


def test_ease_factor_floor(now):
    card = _reviewed(3, 10, ease=1.35)
    for _ in range(5):
        result = calculate_next_review(card, "again", now)
        card = _reviewed(result.repetitions, result.interval, ease=result.ease_factor)
    assert card.ease_factor == MIN_EASE_FACTOR


def test_ease_factor_ceiling(now):
    result = calculate_next_review(_reviewed(3, 10, ease=2.99), "easy", now)
    assert result.ease_factor == 3.0


def test_graduated_status(now):
    result = calculate_next_review(_reviewed(4, 20), "good", now)
    assert result.interval >= 21
    assert result.status == LegacyStatus.GRADUATED


def test_apply_review_logs_history(legacy_card, now):
    updated = apply_review(legacy_card, "hard", now, time_spent_ms=1500)
    assert legacy_card.review_history == ()
    assert len(updated.review_history) == 1
    entry = updated.review_history[0]
    assert entry.response == Response.HARD
    assert entry.time_spent_ms == 1500
    assert updated.next_review == now + timedelta(days=1)


def test_apply_review_unknown_response_logged_as_good(legacy_card, now):
    updated = apply_review(legacy_card, "whatever", now)
    assert updated.review_history[0].response == Response.GOOD


def test_is_due_for_review(now):
    assert is_due_for_review(LegacyCard(), now)
    assert is_due_for_review(LegacyCard(next_review=now), now)
    assert not is_due_for_review(LegacyCard(next_review=now + timedelta(hours=1)), now)


def test_cards_for_review_most_overdue_first(now):
    late = _reviewed(2, 6, next_review=now - timedelta(days=5))
    slightly = _reviewed(2, 6, next_review=now - timedelta(days=1))
    future = _reviewed(2, 6, next_review=now + timedelta(days=1))

    assert get_cards_for_review([slightly, future, late], now) == [late, slightly]
    assert get_cards_for_review([slightly, future, late], now, limit=1) == [late]


def test_new_cards_oldest_first(now):
    newer = create_legacy_card(now)
    older = create_legacy_card(now - timedelta(days=3))
    reviewed = _reviewed(2, 6)
    assert get_new_cards([newer, reviewed, older]) == [older, newer]


def test_study_session_interleaves_new_cards(now):
    reviews = [_reviewed(2, 6, next_review=now - timedelta(days=i + 1)) for i in range(6)]
    new_cards = [create_legacy_card(now - timedelta(minutes=i)) for i in range(3)]

    session = get_study_session(reviews + new_cards, max_new=3, max_review=6, today=now)

    statuses = [card.status for card in session]
    assert len(session) == 9
    assert statuses[3] == LegacyStatus.NEW
    assert statuses[7] == LegacyStatus.NEW
    assert statuses[8] == LegacyStatus.NEW


def test_average_ease_factor():
    assert calculate_average_ease_factor([]) == DEFAULT_EASE_FACTOR
    cards = [_reviewed(1, 1, ease=2.0), _reviewed(1, 1, ease=3.0)]
    assert calculate_average_ease_factor(cards) == pytest.approx(2.5)


def test_retention_rate(legacy_card, now):
    assert calculate_retention_rate([legacy_card]) == 0.0
    card = apply_review(legacy_card, "good", now)
    card = apply_review(card, "again", now + timedelta(days=3))
    assert calculate_retention_rate([card]) == pytest.approx(50.0)


def test_zero_limit_means_no_limit(now):
    due = [_reviewed(2, 6, next_review=now - timedelta(days=d)) for d in (1, 2)]
    new_cards = [create_legacy_card(now), create_legacy_card(now)]

    assert len(get_cards_for_review(due, now, limit=0)) == 2
    assert len(get_new_cards(new_cards, limit=0)) == 2


@pytest.mark.parametrize(
    "offset, text",
    [
        (timedelta(days=-2), "Today"),
        (timedelta(hours=5), "Tomorrow"),
        (timedelta(days=1), "Tomorrow"),
        (timedelta(days=4), "In 4 days"),
        (timedelta(days=10), "In 2 weeks"),
        (timedelta(days=45), "In 2 months"),
    ],
)
def test_next_review_text(now, offset, text):
    assert get_next_review_text(_reviewed(2, 6, next_review=now + offset), now) == text


def test_next_review_text_without_date(now):
    assert get_next_review_text(LegacyCard(), now) == "Today"


@pytest.mark.parametrize("count, minutes", [(0, 0), (1, 1), (6, 1), (7, 2), (30, 5)])
def test_estimate_session_duration(count, minutes):
    assert estimate_session_duration(count) == minutes
