import math
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, List

from ..config import DEFAULT_CONFIG, SchedulerConfig
from .card import Card
from .enums import OUTCOME_LABELS, Outcome, Status
from .errors import InvalidOutcome


def parse_outcome(outcome) -> Outcome:
    """Accept an Outcome, its value ("know") or its label ("认识")."""
    if isinstance(outcome, Outcome):
        return outcome
    try:
        return Outcome(outcome)
    except ValueError:
        pass
    for member, label in OUTCOME_LABELS.items():
        if outcome == label:
            return member
    raise InvalidOutcome(outcome)


def round_days(value: float) -> int:
    # Half-up, so 2.5 days is 3 and not 2 as with round()
    return int(math.floor(value + 0.5))


def _clamp(days: int, config: SchedulerConfig) -> int:
    return min(days, config.max_interval_days)


def _ease(value: float) -> float:
    # Keep the ease on a 0.01 grid so 2.5 + 0.1 is exactly 2.6
    return round(value, 2)


def _due_key(card: Card):
    # New cards sort after every scheduled card; the tuples differ in the
    # first element so due_at is never compared with an id.
    if card.is_new:
        return (True, card.id)
    return (False, card.due_at, card.id)


def select_due(cards: Iterable[Card], now: datetime) -> List[Card]:
    return sorted((c for c in cards if c.is_due(now)), key=_due_key)


def grade(card: Card, outcome, now: datetime, config: SchedulerConfig = DEFAULT_CONFIG) -> Card:
    outcome = parse_outcome(outcome)

    if outcome == Outcome.FORGOT:
        return replace(
            card,
            status=Status.LEARNING,
            consecutive_correct=0,
            ease_factor=max(config.min_ease, _ease(card.ease_factor - config.forgot_ease_penalty)),
            interval_days=0,
            due_at=now,
            last_reviewed_at=now,
        )

    if outcome == Outcome.VAGUE:
        interval = _clamp(max(1, round_days(card.interval_days * config.vague_growth)), config)
        status = card.status
        if status in (Status.NEW, Status.LEARNING):
            status = Status.REVIEWING
        return replace(
            card,
            status=status,
            consecutive_correct=0,
            interval_days=interval,
            due_at=now + timedelta(days=interval),
            last_reviewed_at=now,
        )

    # Outcome.KNOW
    streak = card.consecutive_correct + 1
    if card.status in (Status.NEW, Status.LEARNING):
        interval = 1
    else:
        interval = round_days(card.interval_days * card.ease_factor)
    interval = _clamp(max(1, interval), config)

    # Mastered never regresses on a correct answer
    if streak >= config.mastery_streak or card.status == Status.MASTERED:
        status = Status.MASTERED
    else:
        status = Status.REVIEWING

    return replace(
        card,
        status=status,
        consecutive_correct=streak,
        ease_factor=_ease(card.ease_factor + config.know_ease_bonus),
        interval_days=interval,
        due_at=now + timedelta(days=interval),
        last_reviewed_at=now,
    )
