"""
Module for proposing highlight clips from a transcript using LLM models.
"""

from groq import AsyncGroq

from clipper.core.prompts import highlight_template
from clipper.models.schemas import HighlightConfig
from clipper.utils.error_handling import ApiFailure
from clipper.utils.logger import logging


def build_highlight_prompt(timestamped_transcript: str) -> str:
    """Embed a timestamped transcript into the highlight instruction."""
    return highlight_template.format(transcript=timestamped_transcript)


class GroqHighlighter:
    """Ask a Groq chat model for the best clip moments of a transcript."""

    def __init__(self, highlight_config: HighlightConfig, api_key: str):
        """
        Initialize the highlighter with API key.

        Args:
            highlight_config: Model and sampling settings
            api_key: Groq API key from the service configuration
        """
        self.highlight_config = highlight_config
        self.api_key = api_key
        if not self.api_key:
            raise ValueError("Groq API key is required. Set GROQ_API_KEY in the .env file.")

        self.client = AsyncGroq(api_key=self.api_key)

    async def propose_highlights(self, timestamped_transcript: str) -> str:
        """
        Send the transcript to the model.

        The answer is returned untouched; it is expected to contain a JSON
        array but that is not checked here.

        Args:
            timestamped_transcript: Lines of ``[<start>s]: <text>``

        Returns:
            The model's raw answer (empty string if there is none)

        Raises:
            ApiFailure: if the API call fails
        """
        try:
            completion = await self.client.chat.completions.create(
                messages=[
                    {"role": "user", "content": build_highlight_prompt(timestamped_transcript)}
                ],
                model=self.highlight_config.model,
                temperature=self.highlight_config.temperature,
            )
        except Exception as e:
            logging.error(f"Highlight request failed: {e}")
            raise ApiFailure(f"Highlight request failed: {e}") from e

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
