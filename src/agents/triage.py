"""
Triage Invoker.

Asks the language model for triage signals on a single feedback item and
reduces the reply to a validated Analysis.
"""

import logging

from src.agents.extraction import extract_json_object
from src.agents.normalization import normalize_analysis
from src.errors import ModelUnavailableError, TriageFormatError
from src.models.feedback import Analysis
import config.settings as settings

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a product feedback triage assistant. "
    "Return ONLY valid JSON (no markdown, no extra text)."
)


def _construct_user_prompt(source: str, text: str) -> str:
    """Construct user prompt from feedback."""
    return f"""Analyze this product feedback and extract:
- sentiment: one of ["positive","neutral","negative"]
- urgency: one of ["low","medium","high"]
  * HIGH only if it blocks core workflow, causes outage/data loss/security issues, or major account/revenue impact.
  * MEDIUM if it significantly harms workflow but has a workaround or affects a subset.
  * LOW if it is cosmetic, minor annoyance, or nice-to-have.
- value_impact: one of ["low","medium","high"] (impact if fixed)
  * HIGH if fixing unlocks major user value, reliability, or revenue.
  * MEDIUM if helpful improvement for many users.
  * LOW if incremental or niche.
- themes: array of 2-6 short theme labels (strings)
- summary: a single sentence summary (<= 200 chars)

Feedback source: {source}
Feedback text: {text}

Return JSON with keys: sentiment, urgency, value_impact, themes, summary."""


class TriageInvoker:
    """
    Runs one triage model call.

    Pipeline: prompt -> model.generate -> extract_json_object -> normalize_analysis.
    Any model exposing generate(system_prompt, user_prompt) -> str works here.
    """

    def __init__(self, model=None):
        """
        Args:
            model: Text generation capability, or None when not configured
        """
        self.model = model

    def invoke(self, source: str, text: str) -> Analysis:
        """
        Triage a feedback item.

        Args:
            source: Origin label of the feedback
            text: Feedback body

        Returns:
            Validated Analysis

        Raises:
            ModelUnavailableError: If no model is configured or the call fails
            TriageFormatError: If the reply cannot be normalized
        """
        if self.model is None:
            raise ModelUnavailableError("Model capability is not configured (set GOOGLE_API_KEY)")

        raw = self.model.generate(SYSTEM_PROMPT, _construct_user_prompt(source, text))
        raw = raw if isinstance(raw, str) else str(raw)

        analysis = normalize_analysis(extract_json_object(raw))
        if analysis is None:
            logger.warning(f"Triage reply for source={source} did not match the analysis schema")
            raise TriageFormatError(
                "AI returned unexpected format",
                excerpt=raw[:settings.ERROR_EXCERPT_CHARS]
            )

        logger.debug(
            f"Triaged feedback from {source}: urgency={analysis.urgency}, "
            f"sentiment={analysis.sentiment}, themes={len(analysis.themes)}"
        )
        return analysis
