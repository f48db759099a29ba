from django.db import models
from django.utils import timezone

from ..config import INITIAL_EASE
from ..domain.enums import STATUS_LABELS, Status


class Word(models.Model):
    text = models.CharField(max_length=128)
    meaning = models.CharField(max_length=255)
    phonetic = models.CharField(max_length=128, blank=True, default="")
    status = models.CharField(
        max_length=16,
        choices=[(s.value, STATUS_LABELS[s]) for s in Status],
        default=Status.NEW.value,
    )
    interval_days = models.PositiveIntegerField(default=0)
    ease_factor = models.FloatField(default=INITIAL_EASE)
    due_at = models.DateTimeField(null=True, blank=True)  # UTC, null while new
    last_reviewed_at = models.DateTimeField(null=True, blank=True)
    consecutive_correct = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["status", "due_at"], name="review_word_status_due_idx"),
        ]

    def __str__(self):
        return self.text


class ReviewLog(models.Model):
    """One grading, keyed by the client's idempotency key, with the state it produced."""

    word = models.ForeignKey(Word, on_delete=models.CASCADE, related_name="reviews")
    outcome = models.CharField(max_length=8)
    idempotency_key = models.CharField(max_length=64)
    created_at = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=16)
    interval_days = models.PositiveIntegerField()
    ease_factor = models.FloatField()
    due_at = models.DateTimeField()
    last_reviewed_at = models.DateTimeField()
    consecutive_correct = models.PositiveIntegerField()

    class Meta:
        unique_together = (("word", "idempotency_key"),)
        indexes = [
            models.Index(fields=["word", "created_at"], name="review_log_word_created_idx"),
        ]
