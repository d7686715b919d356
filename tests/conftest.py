from datetime import datetime, timezone

import pytest

from srs_engine.fsrs import create_card, review_card
from srs_engine.sm2 import create_legacy_card


@pytest.fixture
def now():
    """Fixed review clock, mid-morning UTC."""
    return datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def new_card(now):
    return create_card(now)


@pytest.fixture
def review_state_card(new_card, now):
    """A card that has graduated to Review (good, then good 10 minutes later)."""
    first = review_card(new_card, "good", now).card
    return review_card(first, "good", first.due).card


@pytest.fixture
def legacy_card(now):
    return create_legacy_card(now)
