from django.db.models import Count
import structlog

from ..data.models import Word
from ..data.repos import create_word, delete_word, filter_words
from ..domain.enums import Status

logger = structlog.get_logger()


def list_words(search=None, status=None):
    return filter_words(search=search, status=status)


def add_word(text, meaning, phonetic=""):
    word = create_word(text, meaning, phonetic)
    logger.info("word_added", card_id=str(word.pk), text=text)
    return word


def remove_word(word_id):
    delete_word(word_id)
    logger.info("word_deleted", card_id=str(word_id))


def status_counts():
    """Word counts per status, for the study progress bar."""
    rows = Word.objects.order_by().values("status").annotate(n=Count("id"))
    counts = {s.value: 0 for s in Status}
    for row in rows:
        counts[row["status"]] = row["n"]
    counts["total"] = sum(counts.values())
    return counts
