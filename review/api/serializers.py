from rest_framework import serializers

from ..domain.enums import OUTCOME_LABELS, STATUS_LABELS, Outcome, Status
from ..utils.time import to_cst_iso


class CardSerializer(serializers.Serializer):
    """Read-only view of a Card value or a Word row."""

    id = serializers.IntegerField()
    text = serializers.CharField()
    meaning = serializers.CharField()
    phonetic = serializers.CharField()
    status = serializers.SerializerMethodField()
    status_label = serializers.SerializerMethodField()
    interval_days = serializers.IntegerField()
    ease_factor = serializers.FloatField()
    due_at = serializers.DateTimeField(allow_null=True)
    due_at_cst = serializers.SerializerMethodField()
    last_reviewed_at = serializers.DateTimeField(allow_null=True)
    consecutive_correct = serializers.IntegerField()

    def get_status(self, obj):
        return Status(obj.status).value

    def get_status_label(self, obj):
        return STATUS_LABELS[Status(obj.status)]

    def get_due_at_cst(self, obj):
        return to_cst_iso(obj.due_at)


class WordInSerializer(serializers.Serializer):
    text = serializers.CharField(max_length=128)
    meaning = serializers.CharField(max_length=255)
    phonetic = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")


class WordQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=[s.value for s in Status], required=False)


class OutcomeSerializer(serializers.Serializer):
    outcome = serializers.ChoiceField(choices=[(o.value, OUTCOME_LABELS[o]) for o in Outcome])
    idempotency_key = serializers.CharField(max_length=64)


class NowQuerySerializer(serializers.Serializer):
    now = serializers.DateTimeField(required=False)  # ISO-8601


class SessionSerializer(serializers.Serializer):
    queue = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=True)
    cursor = serializers.IntegerField(min_value=0)


class SessionGradeSerializer(SessionSerializer):
    outcome = serializers.ChoiceField(choices=[(o.value, OUTCOME_LABELS[o]) for o in Outcome])
    idempotency_key = serializers.CharField(max_length=64)
    now = serializers.DateTimeField(required=False)
