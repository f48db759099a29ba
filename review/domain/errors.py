class ReviewError(Exception):
    """Base class for review scheduling errors."""


class InvalidOutcome(ReviewError, ValueError):
    """Raised when a grade is not one of forgot / vague / know."""

    def __init__(self, outcome):
        self.outcome = outcome
        super().__init__(f"Invalid outcome: {outcome!r}")


class SessionComplete(ReviewError):
    """Raised when grading is attempted past the end of a session queue."""

    def __init__(self, total):
        self.total = total
        super().__init__(f"Session complete: all {total} cards graded")


class CardNotFound(ReviewError, LookupError):
    def __init__(self, card_id):
        self.card_id = card_id
        super().__init__(f"Card not found: {card_id}")
