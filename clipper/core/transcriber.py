"""
Module for transcribing audio files using Groq's API.
"""

import asyncio
from pathlib import Path
from typing import Any, Dict

from groq import AsyncGroq

from clipper.models.schemas import Transcript, TranscriptionConfig, TranscriptSegment
from clipper.utils.error_handling import ApiFailure
from clipper.utils.logger import logging


class GroqTranscriber:
    """Class to handle audio transcription operations."""

    def __init__(
        self, transcribe_config: TranscriptionConfig, api_key: str
    ):
        """
        Initialize the transcriber with API key.

        Args:
            transcribe_config: Configuration for transcription
            api_key: Groq API key from the service configuration
        """
        self.transcribe_config = transcribe_config
        self.api_key = api_key
        if not self.api_key:
            raise ValueError(
                "Groq API key is required. Set GROQ_API_KEY in the .env file."
            )

        self.client = AsyncGroq(api_key=self.api_key)

    async def transcribe(self, audio_path: Path) -> Transcript:
        """
        Transcribe an audio file.

        Args:
            audio_path: Path to the audio file

        Returns:
            Transcript with segment timestamps

        Raises:
            ApiFailure: if the API call fails
        """
        audio_file_path = Path(audio_path)
        if not audio_file_path.is_file():
            raise FileNotFoundError(f"Audio file not found at {audio_file_path}")

        logging.info(f"Transcribing audio file: {audio_file_path}")

        content = await asyncio.to_thread(audio_file_path.read_bytes)

        options = {}
        if self.transcribe_config.prompt:
            options["prompt"] = self.transcribe_config.prompt
        if self.transcribe_config.language:
            options["language"] = self.transcribe_config.language

        try:
            transcription = await self.client.audio.transcriptions.create(
                file=(audio_file_path.name, content),
                model=self.transcribe_config.model,
                response_format=self.transcribe_config.response_format,
                timestamp_granularities=self.transcribe_config.timestamp_granularities,
                temperature=self.transcribe_config.temperature,
                **options,
            )
        except Exception as e:
            logging.error(f"Transcription failed: {e}")
            raise ApiFailure(f"Transcription failed: {e}") from e

        if hasattr(transcription, "model_dump"):
            data = transcription.model_dump()
        else:
            data = dict(transcription)

        logging.info("Transcription complete.")
        return self.parse_transcription(data)

    @staticmethod
    def parse_transcription(data: Dict[str, Any]) -> Transcript:
        """
        Convert a verbose_json transcription into a Transcript.

        Args:
            data: Transcription response as a dictionary

        Returns:
            Transcript
        """
        segments = [
            TranscriptSegment(
                start_seconds=segment.get("start", 0.0),
                end_seconds=segment.get("end"),
                text=segment.get("text", ""),
            )
            for segment in data.get("segments") or []
        ]
        return Transcript(
            text=data.get("text") or "",
            segments=segments,
            language=data.get("language"),
        )
