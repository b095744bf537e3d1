"""
Assistant Orchestrator.

Answers free-text questions about the feedback dataset from its digest only.
"""

import logging

from src.agents.aggregation import AggregationEngine
from src.errors import ModelUnavailableError
from src.orchestrator import clamp_text
import config.settings as settings

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are an assistant for summarizing triaged product feedback. "
    "Answer with summaries ONLY. Do not include item IDs, links, or quoting full user text. "
    "Be concise, structured, and actionable."
)


def _construct_user_prompt(context: str, question: str) -> str:
    return (
        f"{context}\n\n"
        f"Question: {question}\n\n"
        "Return a short answer with bullet points when helpful. Summaries only."
    )


class AssistantOrchestrator:
    """
    Combines a dataset digest with a question into one model call.

    The prompt forbids ids, links and quoted feedback; the answer itself is
    returned as-is.
    """

    def __init__(self, engine: AggregationEngine, model=None, window: int = settings.ASSISTANT_WINDOW):
        self.engine = engine
        self.model = model
        self.window = window

    def answer(self, question: str) -> str:
        """
        Answer a question over the most recent `window` rows.

        Raises:
            ValueError: If the question is blank
            ModelUnavailableError: If no model is configured or the call fails
        """
        question = clamp_text(question, settings.MAX_QUESTION_CHARS)
        if not question:
            raise ValueError("Missing required field: question")

        if self.model is None:
            raise ModelUnavailableError("Model capability is not configured (set GOOGLE_API_KEY)")

        digest = self.engine.summarize(self.window)
        raw = self.model.generate(SYSTEM_PROMPT, _construct_user_prompt(digest.to_context(), question))

        logger.info(f"Assistant answered over {digest.analyzed}/{digest.total} analyzed rows")
        return str(raw).strip()
