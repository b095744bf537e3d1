"""
Analysis Normalizer.

Validates an extracted model object against the Analysis schema and clamps
its string values to storage limits.
"""

import logging
from typing import Any, Optional

from src.models.feedback import Analysis, SENTIMENTS, LEVELS
import config.settings as settings

logger = logging.getLogger(__name__)


# Models are inconsistent about this key's spelling
VALUE_IMPACT_KEYS = ("value_impact", "valueImpact", "value")


def _read_value_impact(candidate: dict) -> Any:
    for key in VALUE_IMPACT_KEYS:
        value = candidate.get(key)
        if value is not None:
            return value
    return None


def normalize_analysis(candidate: Any) -> Optional[Analysis]:
    """
    Turn an untrusted candidate object into an Analysis.

    Structure is checked strictly (any wrong type or out-of-set value rejects
    the whole candidate); values that pass are then trimmed and truncated.

    Args:
        candidate: Object produced by the response extractor (may be None)

    Returns:
        Analysis, or None if the candidate does not match the schema
    """
    if not isinstance(candidate, dict):
        logger.debug("Rejected analysis: candidate is not an object")
        return None

    sentiment = candidate.get("sentiment")
    if sentiment not in SENTIMENTS:
        logger.debug(f"Rejected analysis: invalid sentiment {sentiment!r}")
        return None

    urgency = candidate.get("urgency")
    if urgency not in LEVELS:
        logger.debug(f"Rejected analysis: invalid urgency {urgency!r}")
        return None

    value_impact = _read_value_impact(candidate)
    if value_impact not in LEVELS:
        logger.debug(f"Rejected analysis: invalid value_impact {value_impact!r}")
        return None

    themes = candidate.get("themes")
    if not isinstance(themes, list) or any(not isinstance(t, str) for t in themes):
        logger.debug("Rejected analysis: themes must be a list of strings")
        return None

    summary = candidate.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        logger.debug("Rejected analysis: summary is missing or blank")
        return None

    cleaned_themes = [t.strip() for t in themes]
    cleaned_themes = [t for t in cleaned_themes if t][:settings.MAX_THEMES]
    cleaned_themes = [t[:settings.MAX_THEME_CHARS] for t in cleaned_themes]

    return Analysis(
        sentiment=sentiment,
        urgency=urgency,
        value_impact=value_impact,
        themes=cleaned_themes,
        summary=summary.strip()[:settings.MAX_SUMMARY_CHARS]
    )


# Design Rationale and Trade-offs:
#
# 1. Validate strictly, then clamp.
#    - A wrong type or out-of-set value rejects the candidate
#    - Overlong themes and summaries are truncated, not rejected
#    - Trade-off: truncation may cut a summary mid-word
