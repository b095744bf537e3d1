"""
Language model capability.

Wraps Gemini behind a single generate(system_prompt, user_prompt) call so the
triage and assistant agents never depend on the provider API directly.
"""

import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from src.errors import ModelUnavailableError

logger = logging.getLogger(__name__)


class GeminiTextModel:
    """
    Text generation backed by Google Gemini.

    The system instruction differs between triage and assistant calls, so a
    GenerativeModel is built per request rather than once at startup.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.0
    ):
        """
        Initialize the model capability.

        Args:
            api_key: Gemini API key
            model_name: Gemini model to use
            temperature: LLM temperature (0.0 for deterministic)
        """
        self.model_name = model_name
        self.temperature = temperature

        genai.configure(api_key=api_key)

        logger.info(f"Initialized GeminiTextModel with model={model_name}, temp={temperature}")

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        """
        Run a single generation.

        Args:
            system_prompt: System instruction for this call
            user_prompt: User message

        Returns:
            Raw model text (not guaranteed to be JSON)

        Raises:
            ModelUnavailableError: If the API call fails or returns no text
        """
        model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config={"temperature": self.temperature},
            system_instruction=system_prompt
        )

        try:
            response = model.generate_content(user_prompt)
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini API error: {e}")
            raise ModelUnavailableError(f"Model call failed: {e}") from e

        # response.text raises ValueError when the candidate was blocked or empty
        try:
            text = response.text
        except ValueError as e:
            logger.error(f"Gemini returned no text: {e}")
            raise ModelUnavailableError("Model returned no text") from e

        logger.debug(f"Model returned {len(text)} chars")
        return text


def build_text_model(
    api_key: str,
    model_name: str = "gemini-1.5-flash",
    temperature: float = 0.0
) -> Optional[GeminiTextModel]:
    """Return a configured model, or None when no API key is set."""
    if not api_key:
        logger.warning("GOOGLE_API_KEY not set, model capability is unavailable")
        return None
    return GeminiTextModel(api_key=api_key, model_name=model_name, temperature=temperature)
