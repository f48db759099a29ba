from dataclasses import dataclass, fields, replace

INITIAL_EASE = 2.5
MIN_EASE = 1.3
KNOW_EASE_BONUS = 0.1
FORGOT_EASE_PENALTY = 0.2
VAGUE_GROWTH = 1.2
MASTERY_STREAK = 3         # consecutive "know" grades
MAX_INTERVAL_DAYS = 365    # 1 year


@dataclass(frozen=True)
class SchedulerConfig:
    initial_ease: float = INITIAL_EASE
    min_ease: float = MIN_EASE
    know_ease_bonus: float = KNOW_EASE_BONUS
    forgot_ease_penalty: float = FORGOT_EASE_PENALTY
    vague_growth: float = VAGUE_GROWTH
    mastery_streak: int = MASTERY_STREAK
    max_interval_days: int = MAX_INTERVAL_DAYS

    def __post_init__(self):
        # Cards reject an ease below MIN_EASE, so the floor cannot go lower
        if self.min_ease < MIN_EASE:
            raise ValueError(f"min_ease must be >= {MIN_EASE}, got {self.min_ease}")
        if self.max_interval_days < 1:
            raise ValueError(f"max_interval_days must be >= 1, got {self.max_interval_days}")
        if self.mastery_streak < 1:
            raise ValueError(f"mastery_streak must be >= 1, got {self.mastery_streak}")

    @classmethod
    def from_settings(cls):
        """
        Build a config from the REVIEW_SCHEDULER Django setting.
        Keys are SchedulerConfig field names in upper case; missing keys keep
        their defaults.
        """
        from django.conf import settings

        overrides = getattr(settings, "REVIEW_SCHEDULER", None) or {}
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in overrides.items():
            name = key.lower()
            if name not in known:
                raise ValueError(f"Unknown REVIEW_SCHEDULER key: {key}")
            values[name] = value
        return replace(DEFAULT_CONFIG, **values)


DEFAULT_CONFIG = SchedulerConfig()
