import pytest
import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from review.config import SchedulerConfig
from review.domain.card import Card, new_card
from review.domain.enums import Outcome, Status
from review.domain.errors import InvalidOutcome
from review.domain.logic import grade, parse_outcome, round_days, select_due

logger = logging.getLogger(__name__)

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
DAY = timedelta(days=1)


def make_card(card_id=1, **state):
    return replace(new_card(card_id, "Serendipity", "意外发现珍奇事物的本领"), **state)


def reviewed(card_id, due_at, interval=1, status=Status.REVIEWING):
    return make_card(
        card_id,
        status=status,
        interval_days=interval,
        due_at=due_at,
        last_reviewed_at=due_at - timedelta(days=interval),
    )


# Grading

def test_new_card_know_scenario():
    """New card graded know at t0 -> reviewing, 1 day, streak 1."""
    card = grade(make_card(), Outcome.KNOW, T0)

    assert card.status == Status.REVIEWING
    assert card.interval_days == 1
    assert card.due_at == T0 + DAY
    assert card.last_reviewed_at == T0
    assert card.consecutive_correct == 1
    assert card.ease_factor == pytest.approx(2.6)


def test_forgot_after_know_scenario():
    """Same card graded forgot a day later -> learning, due immediately, ease 2.4."""
    card = grade(make_card(), Outcome.KNOW, T0)
    card = grade(card, Outcome.FORGOT, T0 + DAY)

    assert card.status == Status.LEARNING
    assert card.interval_days == 0
    assert card.due_at == T0 + DAY
    assert card.consecutive_correct == 0
    assert card.ease_factor == pytest.approx(2.4)


def test_three_knows_from_new_reach_mastered():
    card = make_card()
    intervals, statuses = [], []
    for i in range(3):
        card = grade(card, Outcome.KNOW, T0 + i * DAY)
        intervals.append(card.interval_days)
        statuses.append(card.status)

    # 1, round(1 * 2.6), round(3 * 2.7)
    assert intervals == [1, 3, 8]
    assert statuses == [Status.REVIEWING, Status.REVIEWING, Status.MASTERED]
    assert card.ease_factor == pytest.approx(2.8)
    logger.info("✓ Passed: know x3 intervals %s", intervals)


@pytest.mark.parametrize("status", list(Status))
def test_forgot_resets_interval_and_due(status):
    if status == Status.NEW:
        card = make_card()
    else:
        card = reviewed(1, T0, interval=12, status=status)
    graded = grade(card, Outcome.FORGOT, T0 + 3 * DAY)

    assert graded.interval_days == 0
    assert graded.due_at == T0 + 3 * DAY
    assert graded.status == Status.LEARNING


@pytest.mark.parametrize("streak", [0, 1, 2, 5])
def test_know_increments_streak(streak):
    card = reviewed(1, T0, interval=4)
    card = replace(card, consecutive_correct=streak)
    assert grade(card, Outcome.KNOW, T0).consecutive_correct == streak + 1


def test_ease_never_below_floor():
    card = make_card()
    for i in range(20):
        card = grade(card, Outcome.FORGOT, T0 + i * DAY)
        assert card.ease_factor >= 1.3
    assert card.ease_factor == pytest.approx(1.3)


def test_vague_promotes_learning_and_resets_streak():
    card = grade(make_card(), Outcome.FORGOT, T0)
    card = grade(card, Outcome.VAGUE, T0)

    assert card.status == Status.REVIEWING
    assert card.interval_days == 1
    assert card.due_at == T0 + DAY
    assert card.consecutive_correct == 0
    assert card.ease_factor == pytest.approx(2.3)


def test_vague_grows_interval_and_keeps_status():
    card = replace(reviewed(1, T0, interval=10, status=Status.MASTERED), consecutive_correct=4)
    graded = grade(card, Outcome.VAGUE, T0)

    assert graded.status == Status.MASTERED
    assert graded.interval_days == 12
    assert graded.ease_factor == card.ease_factor
    assert graded.consecutive_correct == 0


def test_mastered_stays_mastered_on_know_after_vague():
    card = replace(reviewed(1, T0, interval=10, status=Status.MASTERED), consecutive_correct=0)
    assert grade(card, Outcome.KNOW, T0).status == Status.MASTERED


def test_know_uses_current_ease():
    card = replace(reviewed(1, T0, interval=10), ease_factor=2.5)
    graded = grade(card, Outcome.KNOW, T0)
    assert graded.interval_days == 25
    assert graded.ease_factor == pytest.approx(2.6)


def test_interval_capped():
    """Repeated know converges at the configured cap instead of overflowing."""
    card = make_card()
    for i in range(30):
        card = grade(card, Outcome.KNOW, T0)
    assert card.interval_days == 365

    small = SchedulerConfig(max_interval_days=30)
    card = grade(reviewed(1, T0, interval=20), Outcome.KNOW, T0, small)
    assert card.interval_days == 30
    assert card.due_at == T0 + 30 * DAY


def test_due_is_last_review_plus_interval():
    card = make_card()
    for i, outcome in enumerate([Outcome.KNOW, Outcome.VAGUE, Outcome.KNOW, Outcome.FORGOT, Outcome.KNOW]):
        card = grade(card, outcome, T0 + i * DAY)
        assert card.due_at == card.last_reviewed_at + timedelta(days=card.interval_days)


def test_grade_does_not_mutate_input():
    card = make_card()
    grade(card, Outcome.KNOW, T0)
    assert card == make_card()


def test_round_days_half_up():
    assert round_days(2.5) == 3
    assert round_days(2.4) == 2
    assert round_days(1.2) == 1


# Outcomes

@pytest.mark.parametrize("raw, expected", [
    (Outcome.KNOW, Outcome.KNOW),
    ("vague", Outcome.VAGUE),
    ("忘记", Outcome.FORGOT),
])
def test_parse_outcome(raw, expected):
    assert parse_outcome(raw) is expected


@pytest.mark.parametrize("bad", ["easy", 3, None])
def test_invalid_outcome(bad):
    with pytest.raises(InvalidOutcome):
        grade(make_card(), bad, T0)


# Card invariants

def test_card_rejects_low_ease():
    with pytest.raises(ValueError):
        make_card(ease_factor=1.2)


def test_new_card_has_no_schedule():
    with pytest.raises(ValueError):
        make_card(due_at=T0)


def test_card_coerces_status_string():
    card = make_card(status="learning", due_at=T0, last_reviewed_at=T0)
    assert card.status is Status.LEARNING


# Due selection

def test_select_due_ordering():
    cards = [
        make_card(5),
        reviewed(4, T0 - DAY),
        reviewed(3, T0 - 2 * DAY),
        make_card(2),
        reviewed(1, T0 - DAY),
        reviewed(6, T0 + DAY),
    ]
    due = select_due(cards, T0)

    # Scheduled by due_at then id, new cards last by id
    assert [c.id for c in due] == [3, 1, 4, 2, 5]


def test_select_due_never_returns_future_cards():
    cards = [reviewed(i, T0 + (i - 3) * DAY) for i in range(1, 7)] + [make_card(7)]
    for c in select_due(cards, T0):
        assert c.status == Status.NEW or c.due_at <= T0


def test_select_due_includes_exact_due_time():
    assert [c.id for c in select_due([reviewed(1, T0)], T0)] == [1]


def test_select_due_idempotent():
    cards = [make_card(2), reviewed(1, T0 - DAY), reviewed(3, T0 + DAY)]
    first = select_due(cards, T0)
    second = select_due(cards, T0)
    assert first == second
    assert len(cards) == 3
