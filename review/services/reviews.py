from django.db import transaction
from django.utils import timezone
import structlog

from ..config import SchedulerConfig
from ..data.repos import (
    all_cards,
    card_from_log,
    get_existing_idempotent,
    load_store,
    lock_store,
    persist_review,
    save_card,
)
from ..domain import session as sessions
from ..domain.errors import CardNotFound
from ..domain.logic import grade, parse_outcome, select_due
from ..domain.session import Session
from ..utils.time import to_cst_iso

logger = structlog.get_logger()


def _apply_grade(card, graded, outcome, idempotency_key):
    """
    Save a graded card and log it. Runs inside the transaction that locked
    the card's row. Returns (card, was_idempotent).
    """
    existing = get_existing_idempotent(card.id, idempotency_key)
    if existing:
        logger.info("idempotent_reuse",
            card_id=str(card.id),
            next_review_utc=existing.due_at.isoformat(),
            next_review_cst=to_cst_iso(existing.due_at),
        )
        return card_from_log(existing), True

    save_card(graded)
    log, was_idempotent = persist_review(graded, outcome, idempotency_key)
    if was_idempotent:
        # Lost a race on the key: undo our save and report the winner
        transaction.set_rollback(True)
        return card_from_log(log), True
    return graded, False


def grade_word(word_id, outcome, idempotency_key, now=None):
    """
    Grade one word outside of a session and persist the result.
    Returns (card, was_idempotent); a repeated key returns the first result.
    """
    outcome = parse_outcome(outcome)
    now = now or timezone.now()
    logger.info("review_received",
        card_id=str(word_id),
        outcome=outcome.value,
        idempotency_key=idempotency_key,
    )

    with transaction.atomic():
        store = lock_store([word_id])
        if word_id not in store:
            raise CardNotFound(word_id)
        card = store[word_id]
        graded = grade(card, outcome, now, SchedulerConfig.from_settings())
        result, was_idempotent = _apply_grade(card, graded, outcome, idempotency_key)

    logger.info("review_scheduled",
        card_id=str(word_id),
        status=result.status.value,
        interval_days=result.interval_days,
        ease_factor=result.ease_factor,
        idempotent=was_idempotent,
        next_review_utc=result.due_at.isoformat(),
        next_review_cst=to_cst_iso(result.due_at),
    )
    return result, was_idempotent


def due_cards(now=None):
    now = now or timezone.now()
    return select_due(all_cards(), now)


def start_session(now=None):
    now = now or timezone.now()
    session = sessions.start(all_cards(), now)
    logger.info("session_started", card_count=len(session.queue), now_utc=now.isoformat())
    return session


def current_card(session: Session):
    return sessions.current(session, load_store(session.queue[session.cursor:session.cursor + 1]))


def grade_in_session(session: Session, outcome, idempotency_key, now=None):
    """
    Grade the session's current card, persist it and advance.
    Replaying the same idempotency key returns the first result without
    grading again. Raises SessionComplete when the queue is exhausted.
    """
    outcome = parse_outcome(outcome)
    now = now or timezone.now()

    with transaction.atomic():
        store = lock_store(session.queue[session.cursor:session.cursor + 1])
        graded, next_session = sessions.grade_current(
            session, store, outcome, now, SchedulerConfig.from_settings()
        )
        card = store[graded.id]
        result, was_idempotent = _apply_grade(card, graded, outcome, idempotency_key)

    done, total = sessions.progress(next_session)
    logger.info("session_graded",
        card_id=str(result.id),
        outcome=outcome.value,
        status=result.status.value,
        interval_days=result.interval_days,
        idempotent=was_idempotent,
        done=done,
        total=total,
    )
    if next_session.is_complete:
        logger.info("session_complete", total=total)
    return result, next_session, was_idempotent
