import json
import os
from datetime import timedelta
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone
from review.data.models import Word
from review.data.repos import create_word


def word_state(entry, now):
    """Scheduling fields for a seeded word, keeping due_at = last review + interval."""
    if entry.get("status", "new") == "new":
        return {}
    interval = entry.get("interval_days", 1)
    last_reviewed = now - timedelta(days=entry.get("last_reviewed_days_ago", 0))
    return {
        "status": entry["status"],
        "interval_days": interval,
        "ease_factor": entry.get("ease_factor", 2.5),
        "consecutive_correct": entry.get("consecutive_correct", 0),
        "last_reviewed_at": last_reviewed,
        "due_at": last_reviewed + timedelta(days=interval),
    }


def data_file_path(file_name):
    """Path of a bundled data file; only bare .json names in this directory."""
    data_dir = os.path.realpath(os.path.dirname(__file__))
    if not isinstance(file_name, str) or os.path.basename(file_name) != file_name or not file_name.endswith(".json"):
        raise CommandError(f"Invalid data file name: {file_name!r}")
    path = os.path.realpath(os.path.join(data_dir, file_name))
    if os.path.dirname(path) != data_dir:
        raise CommandError(f"Invalid data file name: {file_name!r}")
    return path


class Command(BaseCommand):
    help = "Replace all words with the bundled mock vocabulary"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", default="MOCK_WORDS.json", help="JSON file name to load words from"
        )

    def handle(self, *args, **options):
        file_name = options.get("file", "MOCK_WORDS.json")
        json_file_path = data_file_path(file_name)

        try:
            with open(json_file_path, encoding="utf-8") as json_file:
                entries = json.load(json_file)
        except (OSError, ValueError) as e:
            raise CommandError(f"Error loading data: {e}")

        now = timezone.now()
        with transaction.atomic():
            Word.objects.all().delete()
            self.stdout.write(self.style.SUCCESS("All existing word data has been deleted"))
            for entry in entries:
                create_word(
                    entry["text"],
                    entry["meaning"],
                    entry.get("phonetic", ""),
                    **word_state(entry, now),
                )

        self.stdout.write(
            self.style.SUCCESS(f"Loaded {len(entries)} words from {file_name}")
        )
