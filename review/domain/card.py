from dataclasses import dataclass
from datetime import datetime
from typing import Hashable, Optional

from ..config import INITIAL_EASE, MIN_EASE
from .enums import Status


@dataclass(frozen=True)
class Card:
    """
    One vocabulary item plus its spaced-repetition state.
    Cards are values: grading returns a new Card, callers write it back.
    """

    id: Hashable
    text: str
    meaning: str
    phonetic: str = ""
    status: Status = Status.NEW
    interval_days: int = 0
    ease_factor: float = INITIAL_EASE
    due_at: Optional[datetime] = None
    last_reviewed_at: Optional[datetime] = None
    consecutive_correct: int = 0

    def __post_init__(self):
        # Coerce raw values coming from storage
        object.__setattr__(self, "status", Status(self.status))
        if self.interval_days < 0:
            raise ValueError(f"interval_days must be >= 0, got {self.interval_days}")
        if self.ease_factor < MIN_EASE:
            raise ValueError(f"ease_factor must be >= {MIN_EASE}, got {self.ease_factor}")
        if self.status == Status.NEW and (self.interval_days or self.due_at is not None):
            raise ValueError("A new card has no interval and no due date")

    @property
    def is_new(self) -> bool:
        return self.status == Status.NEW

    def is_due(self, now: datetime) -> bool:
        return self.is_new or (self.due_at is not None and self.due_at <= now)


def new_card(card_id, text, meaning, phonetic="") -> Card:
    return Card(id=card_id, text=text, meaning=meaning, phonetic=phonetic)
