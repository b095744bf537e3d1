"""
Error types raised by the triage pipeline.

Extraction misses are not represented here: the extractor and normalizer
signal them by returning None.
"""


class TriageLensError(Exception):
    """Base class for all pipeline failures surfaced to callers."""


class TriageFormatError(TriageLensError):
    """The model answer could not be reduced to a valid Analysis."""

    def __init__(self, message: str, excerpt: str = ""):
        super().__init__(message)
        self.excerpt = excerpt

    def __str__(self) -> str:
        base = super().__str__()
        if self.excerpt:
            return f"{base}: {self.excerpt}"
        return base


class ModelUnavailableError(TriageLensError):
    """The generation capability is not configured or not reachable."""


class NotFoundError(TriageLensError):
    """Referenced feedback id does not exist."""

    def __init__(self, feedback_id: int):
        super().__init__(f"No feedback found for id {feedback_id}")
        self.feedback_id = feedback_id


class PersistenceError(TriageLensError):
    """A feedback store operation failed."""
