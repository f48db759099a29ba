import pytest
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from review.domain import session as sessions
from review.domain.card import new_card
from review.domain.enums import Outcome, Status
from review.domain.errors import CardNotFound, SessionComplete
from review.domain.session import Session

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
DAY = timedelta(days=1)


@pytest.fixture
def store():
    due = replace(
        new_card(1, "Luminous", "发光的；明亮的"),
        status=Status.REVIEWING,
        interval_days=1,
        due_at=T0 - DAY,
        last_reviewed_at=T0 - 2 * DAY,
        consecutive_correct=1,
    )
    future = replace(due, id=2, text="Solitude", due_at=T0 + DAY, last_reviewed_at=T0)
    fresh = new_card(3, "Ephemeral", "转瞬即逝的")
    return {c.id: c for c in (due, future, fresh)}


def test_start_queues_due_cards(store):
    session = sessions.start(store.values(), T0)
    assert session.queue == (1, 3)
    assert session.cursor == 0
    assert sessions.progress(session) == (0, 2)


def test_start_with_nothing_due():
    session = sessions.start([], T0)
    assert session.queue == ()
    assert session.is_complete
    assert sessions.current(session, {}) is None


def test_walk_whole_session(store):
    session = sessions.start(store.values(), T0)
    graded = []
    while sessions.current(session, store) is not None:
        card, session = sessions.grade_current(session, store, Outcome.KNOW, T0)
        store[card.id] = card
        graded.append(card.id)

    assert graded == [1, 3]
    assert session.is_complete
    assert sessions.progress(session) == (2, 2)
    assert store[3].status == Status.REVIEWING
    assert store[1].interval_days == 3


def test_grade_current_past_end_raises(store):
    session = Session(queue=(3,), cursor=1)
    with pytest.raises(SessionComplete):
        sessions.grade_current(session, store, Outcome.VAGUE, T0)


def test_grade_current_does_not_touch_store(store):
    session = Session(queue=(3,))
    card, next_session = sessions.grade_current(session, store, Outcome.FORGOT, T0)
    assert card.status == Status.LEARNING
    assert store[3].status == Status.NEW
    assert session.cursor == 0
    assert next_session.cursor == 1


def test_advance_clamps_at_end():
    session = Session(queue=(1, 2))
    for _ in range(5):
        session = sessions.advance(session)
    assert session.cursor == 2


def test_cursor_past_end_is_complete():
    assert Session(queue=(1,), cursor=7).cursor == 1


def test_negative_cursor_rejected():
    with pytest.raises(ValueError):
        Session(queue=(1,), cursor=-1)


def test_current_missing_card(store):
    with pytest.raises(CardNotFound):
        sessions.current(Session(queue=(99,)), store)
