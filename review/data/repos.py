from django.db import transaction, IntegrityError
from django.db.models import Q

from ..domain.card import Card
from ..domain.errors import CardNotFound
from .models import ReviewLog, Word

CARD_FIELDS = [
    "status",
    "interval_days",
    "ease_factor",
    "due_at",
    "last_reviewed_at",
    "consecutive_correct",
]


def to_card(word: Word) -> Card:
    return Card(
        id=word.pk,
        text=word.text,
        meaning=word.meaning,
        phonetic=word.phonetic,
        status=word.status,
        interval_days=word.interval_days,
        ease_factor=word.ease_factor,
        due_at=word.due_at,
        last_reviewed_at=word.last_reviewed_at,
        consecutive_correct=word.consecutive_correct,
    )


def get_word(word_id) -> Word:
    try:
        return Word.objects.get(pk=word_id)
    except Word.DoesNotExist:
        raise CardNotFound(word_id) from None


def all_cards():
    return [to_card(w) for w in Word.objects.all()]


def load_store(card_ids):
    """Id-keyed cards for a session queue. Ids that no longer exist are absent."""
    return {w.pk: to_card(w) for w in Word.objects.filter(pk__in=set(card_ids))}


def lock_store(card_ids):
    """
    Like load_store, but the rows stay locked until the surrounding
    transaction ends. Must be called inside transaction.atomic().
    """
    words = Word.objects.select_for_update().filter(pk__in=set(card_ids))
    return {w.pk: to_card(w) for w in words}


def filter_words(search=None, status=None):
    qs = Word.objects.all()
    if search:
        qs = qs.filter(Q(text__icontains=search) | Q(meaning__icontains=search))
    if status:
        qs = qs.filter(status=status)
    return qs


def create_word(text, meaning, phonetic="", **state) -> Word:
    return Word.objects.create(text=text, meaning=meaning, phonetic=phonetic, **state)


def delete_word(word_id):
    deleted, _ = Word.objects.filter(pk=word_id).delete()
    if not deleted:
        raise CardNotFound(word_id)


def save_card(card: Card) -> Card:
    """
    Write a graded card back to its row. Callers read the card with
    lock_store in the same transaction, so one grading wins at a time.
    """
    updated = Word.objects.filter(pk=card.id).update(
        status=card.status.value,
        interval_days=card.interval_days,
        ease_factor=card.ease_factor,
        due_at=card.due_at,
        last_reviewed_at=card.last_reviewed_at,
        consecutive_correct=card.consecutive_correct,
    )
    if not updated:
        raise CardNotFound(card.id)
    return card


def get_existing_idempotent(word_id, idem_key):
    return ReviewLog.objects.filter(word_id=word_id, idempotency_key=idem_key).first()


def card_from_log(log: ReviewLog) -> Card:
    """The card as it was right after the logged grading."""
    word = log.word
    return Card(
        id=word.pk,
        text=word.text,
        meaning=word.meaning,
        phonetic=word.phonetic,
        **{name: getattr(log, name) for name in CARD_FIELDS},
    )


def persist_review(card: Card, outcome, idem_key):
    """
    Insert ReviewLog; if a concurrent duplicate slips in, return the existing one.
    """
    try:
        with transaction.atomic():
            return ReviewLog.objects.create(
                word_id=card.id,
                outcome=outcome.value,
                idempotency_key=idem_key,
                status=card.status.value,
                interval_days=card.interval_days,
                ease_factor=card.ease_factor,
                due_at=card.due_at,
                last_reviewed_at=card.last_reviewed_at,
                consecutive_correct=card.consecutive_correct,
            ), False
    except IntegrityError:
        # Duplicate idempotency key safeguard
        return get_existing_idempotent(card.id, idem_key), True
