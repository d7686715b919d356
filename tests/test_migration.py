from datetime import timedelta

import pytest

from srs_engine.errors import MigrationError, SRSEngineError
from srs_engine.fsrs import CardStatus, review_card
from srs_engine.migration import ease_to_difficulty, migrate_collection, migrate_from_sm2
from srs_engine.sm2 import LegacyCard, LegacyStatus, apply_review


def test_reps_round_trip(now):
    legacy = LegacyCard(ease_factor=2.3, interval=12, repetitions=4, status=LegacyStatus.REVIEW)
    card = migrate_from_sm2(legacy, now)
    assert card.reps == legacy.repetitions
    assert card.lapses == 0


def test_migrated_review_card_fields(now):
    next_review = now + timedelta(days=4)
    legacy = LegacyCard(
        ease_factor=2.5,
        interval=10,
        repetitions=3,
        status=LegacyStatus.REVIEW,
        next_review=next_review,
    )

    card = migrate_from_sm2(legacy, now)

    assert card.status == CardStatus.REVIEW
    assert card.due == next_review
    assert card.stability == pytest.approx(9.0)
    assert card.scheduled_days == 10
    assert card.last_review == next_review - timedelta(days=10)
    assert 1.0 <= card.difficulty <= 10.0


def test_due_falls_back_to_interval(now):
    legacy = LegacyCard(ease_factor=2.5, interval=6, repetitions=2, status=LegacyStatus.REVIEW)
    assert migrate_from_sm2(legacy, now).due == now + timedelta(days=6)


@pytest.mark.parametrize(
    "legacy_status, status",
    [
        (LegacyStatus.NEW, CardStatus.NEW),
        (LegacyStatus.LEARNING, CardStatus.LEARNING),
        (LegacyStatus.REVIEW, CardStatus.REVIEW),
        (LegacyStatus.GRADUATED, CardStatus.REVIEW),
    ],
)
def test_status_mapping(now, legacy_status, status):
    legacy = LegacyCard(interval=1, repetitions=1, status=legacy_status)
    assert migrate_from_sm2(legacy, now).status == status


def test_new_card_has_no_last_review(legacy_card, now):
    card = migrate_from_sm2(legacy_card, now)
    assert card.status == CardStatus.NEW
    assert card.last_review is None
    assert card.stability == 1.0


def test_stability_floor(now):
    legacy = LegacyCard(interval=0, repetitions=1, status=LegacyStatus.LEARNING)
    assert migrate_from_sm2(legacy, now).stability == 1.0


def test_ease_to_difficulty_is_decreasing():
    assert ease_to_difficulty(1.3) == pytest.approx(10.0)
    assert ease_to_difficulty(3.0) == pytest.approx(1.0)
    assert ease_to_difficulty(2.0) > ease_to_difficulty(2.5)
    assert ease_to_difficulty(0.5) == pytest.approx(10.0)
    assert ease_to_difficulty(9.0) == pytest.approx(1.0)


def test_migrates_stored_mapping(now):
    record = {
        "ease_factor": 2.1,
        "interval": 3,
        "repetitions": 2,
        "status": "learning",
        "next_review": "2024-03-18T10:30:00Z",
        "phrase": "extra fields are ignored",
    }
    card = migrate_from_sm2(record, now)
    assert card.reps == 2
    assert card.status == CardStatus.LEARNING
    assert card.due == now + timedelta(days=3)


@pytest.mark.parametrize(
    "record",
    [
        {"interval": 3, "repetitions": 2, "status": "review"},
        {"ease_factor": 2.5, "repetitions": 2, "status": "review"},
        {"ease_factor": 2.5, "interval": 3, "status": "review"},
        {"ease_factor": 2.5, "interval": 3, "repetitions": 2},
        {"ease_factor": 2.5, "interval": -1, "repetitions": 2, "status": "review"},
        {"ease_factor": 2.5, "interval": 3, "repetitions": 2, "status": "mastered"},
        {"ease_factor": "easy", "interval": 3, "repetitions": 2, "status": "review"},
    ],
)
def test_malformed_record_raises(record, now):
    with pytest.raises(MigrationError):
        migrate_from_sm2(record, now)


def test_migration_error_is_engine_error():
    assert issubclass(MigrationError, SRSEngineError)


def test_migrated_card_can_be_reviewed(legacy_card, now):
    legacy = apply_review(legacy_card, "good", now)
    legacy = apply_review(legacy, "good", legacy.next_review)
    card = migrate_from_sm2(legacy, now)

    result = review_card(card, "good", card.due)

    assert result.card.reps == legacy.repetitions + 1
    assert result.status == CardStatus.REVIEW


def test_migrate_collection(legacy_card, now, caplog):
    caplog.set_level("INFO", logger="srs_engine.migration")
    reviewed = LegacyCard(ease_factor=2.0, interval=8, repetitions=3, status=LegacyStatus.REVIEW)

    cards = migrate_collection([legacy_card, reviewed], now)

    assert [card.reps for card in cards] == [0, 3]
    assert "Migrated 2 legacy cards" in caplog.text


def test_migrate_collection_stops_on_bad_card(legacy_card, now):
    with pytest.raises(MigrationError):
        migrate_collection([legacy_card, {"interval": 1}], now)
