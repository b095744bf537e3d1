"""
Triage Orchestrator.

Coordinates row creation, model triage and analysis persistence for
feedback items.
"""

import logging
from typing import List

from src.agents.triage import TriageInvoker
from src.errors import NotFoundError, PersistenceError
from src.models.feedback import FeedbackItem, TriageResult
from src.utils.storage import FeedbackStore
import config.settings as settings

logger = logging.getLogger(__name__)


def clamp_text(value, max_chars: int) -> str:
    """Trim a value and cut it to max_chars; non-strings become ''."""
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_chars]


class TriageOrchestrator:
    """
    Owns the transition of a feedback row from unanalyzed to analyzed.

    Ingestion flow:
    1. Insert row (unanalyzed) → 2. Triage with model → 3. Store analysis

    If step 2 or 3 fails the row stays stored unanalyzed and can be
    re-triaged later with reingest_existing().
    """

    def __init__(self, store: FeedbackStore, invoker: TriageInvoker):
        """
        Args:
            store: Feedback store
            invoker: Triage invoker wrapping the model capability
        """
        self.store = store
        self.invoker = invoker

    def ingest(self, source: str, text: str) -> TriageResult:
        """
        Store a new feedback item and triage it.

        Args:
            source: Origin label (trimmed, max 100 chars)
            text: Feedback body (trimmed, max 5000 chars)

        Returns:
            TriageResult with the new id and its analysis

        Raises:
            ValueError: If source or text is blank
            PersistenceError: If the row cannot be created or updated
            TriageFormatError, ModelUnavailableError: From the triage call
        """
        source = clamp_text(source, settings.MAX_SOURCE_CHARS)
        text = clamp_text(text, settings.MAX_TEXT_CHARS)

        if not source:
            raise ValueError("Missing required field: source")
        if not text:
            raise ValueError("Missing required field: text")

        feedback_id = self.store.insert(source, text)
        logger.info(f"Stored feedback {feedback_id} from {source}, triaging")

        analysis = self.invoker.invoke(source, text)

        try:
            self.store.update(feedback_id, analysis)
        except NotFoundError as e:
            raise PersistenceError(f"Row {feedback_id} disappeared before analysis was stored") from e

        logger.info(
            f"Feedback {feedback_id} triaged: urgency={analysis.urgency}, "
            f"sentiment={analysis.sentiment}, value_impact={analysis.value_impact}"
        )
        return TriageResult(id=feedback_id, analysis=analysis)

    def reingest_existing(self, feedback_id: int) -> TriageResult:
        """
        Re-run triage for a stored row and replace its analysis.

        Concurrent calls for the same id are not serialized; the last update wins.

        Raises:
            NotFoundError: If no row has this id
        """
        row = self.store.get(feedback_id)
        if row is None:
            raise NotFoundError(feedback_id)

        analysis = self.invoker.invoke(row.source, row.text)
        self.store.update(feedback_id, analysis)

        logger.info(f"Re-triaged feedback {feedback_id}: urgency={analysis.urgency}")
        return TriageResult(id=feedback_id, analysis=analysis)

    def get(self, feedback_id: int) -> FeedbackItem:
        """Fetch one item, raising NotFoundError if absent."""
        row = self.store.get(feedback_id)
        if row is None:
            raise NotFoundError(feedback_id)
        return row.to_item()

    def list_recent(self, limit: int = settings.DEFAULT_LIST_LIMIT) -> List[FeedbackItem]:
        """List items most recent first; limit is clamped to 1..MAX_LIST_LIMIT."""
        limit = max(1, min(settings.MAX_LIST_LIMIT, limit))
        return [row.to_item() for row in self.store.list_recent(limit)]


# Design Rationale and Trade-offs:
#
# 1. The row is inserted before the model is called.
#    - A format or model failure leaves the text stored but unanalyzed
#    - reingest_existing re-triages that row by id
#    - Trade-off: unanalyzed rows accumulate until someone re-triages them
#
# 2. No retry around the model call.
#    - ModelUnavailableError and TriageFormatError reach the caller unchanged
#    - Trade-off: a transient API error fails the whole request
#
# 3. Analysis is written in one UPDATE of all five columns.
#    - Readers see either no analysis or a complete one
