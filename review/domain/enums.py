from enum import Enum


class Status(str, Enum):
    NEW = "new"
    LEARNING = "learning"
    REVIEWING = "reviewing"
    MASTERED = "mastered"


class Outcome(str, Enum):
    FORGOT = "forgot"
    VAGUE = "vague"
    KNOW = "know"


STATUS_LABELS = {
    Status.NEW: "未学习",
    Status.LEARNING: "学习中",
    Status.REVIEWING: "复习中",
    Status.MASTERED: "已掌握",
}

OUTCOME_LABELS = {
    Outcome.FORGOT: "忘记",
    Outcome.VAGUE: "模糊",
    Outcome.KNOW: "认识",
}
