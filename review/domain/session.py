from dataclasses import dataclass, replace
from datetime import datetime
from typing import Hashable, Iterable, Mapping, Optional, Tuple

from ..config import DEFAULT_CONFIG, SchedulerConfig
from .card import Card
from .errors import CardNotFound, SessionComplete
from .logic import grade, select_due


@dataclass(frozen=True)
class Session:
    """
    One ordered study pass. The queue holds card ids in presentation order;
    cards themselves stay in the caller's store.
    """

    queue: Tuple[Hashable, ...] = ()
    cursor: int = 0

    def __post_init__(self):
        object.__setattr__(self, "queue", tuple(self.queue))
        if self.cursor < 0:
            raise ValueError(f"cursor must be >= 0, got {self.cursor}")
        # Past-the-end cursors mean "complete"
        object.__setattr__(self, "cursor", min(self.cursor, len(self.queue)))

    @property
    def is_complete(self) -> bool:
        return self.cursor >= len(self.queue)


def start(cards: Iterable[Card], now: datetime) -> Session:
    return Session(queue=tuple(c.id for c in select_due(cards, now)))


def current(session: Session, store: Mapping[Hashable, Card]) -> Optional[Card]:
    if session.is_complete:
        return None
    card_id = session.queue[session.cursor]
    try:
        return store[card_id]
    except KeyError:
        raise CardNotFound(card_id) from None


def advance(session: Session) -> Session:
    return replace(session, cursor=min(session.cursor + 1, len(session.queue)))


def grade_current(
    session: Session,
    store: Mapping[Hashable, Card],
    outcome,
    now: datetime,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Tuple[Card, Session]:
    card = current(session, store)
    if card is None:
        raise SessionComplete(len(session.queue))
    return grade(card, outcome, now, config), advance(session)


def progress(session: Session) -> Tuple[int, int]:
    """(done, total) for the "today's review" counter."""
    return session.cursor, len(session.queue)
