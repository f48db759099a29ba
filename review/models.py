from .data.models import ReviewLog, Word  # noqa: F401
