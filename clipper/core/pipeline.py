"""
Highlight extraction: audio -> transcript -> model answer -> highlight list.
"""

import json
import re
from pathlib import Path
from typing import Any, List, Optional

from clipper.core.protocols import HighlightReasoner, MediaTool, Transcriber
from clipper.models.schemas import AnalysisResult
from clipper.utils.error_handling import ParseFailure
from clipper.utils.helpers import get_timestamp_ms, remove_file
from clipper.utils.logger import logging

JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def extract_first_json_array(text: Optional[str]) -> Optional[str]:
    """
    Find the array-shaped part of a model answer.

    The match runs from the first ``[`` to the last ``]``, so prose around
    the array is ignored but brackets inside the prose are not.

    Args:
        text: Free-form model answer

    Returns:
        The bracketed substring, or None if there is none
    """
    if not text:
        return None
    match = JSON_ARRAY_PATTERN.search(text)
    return match.group(0) if match else None


def parse_highlights(text: Optional[str]) -> List[Any]:
    """
    Turn a model answer into a highlight list.

    Args:
        text: Free-form model answer

    Returns:
        Parsed highlights, empty if the answer holds no array

    Raises:
        ParseFailure: if an array was found but is not valid JSON
    """
    candidate = extract_first_json_array(text)
    if candidate is None:
        logging.warning("Model answer contains no JSON array, returning no highlights")
        return []
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ParseFailure(f"Could not parse highlights: {e}") from e


class HighlightPipeline:
    """Orchestrates the highlight analysis of one video."""

    def __init__(
        self,
        media_tool: MediaTool,
        transcriber: Transcriber,
        reasoner: HighlightReasoner,
        temp_dir: Path,
        analysis_window: int = 600,
    ):
        """
        Args:
            media_tool: Source of the audio track
            transcriber: Speech-to-text client
            reasoner: Language model client
            temp_dir: Directory for the intermediate audio file
            analysis_window: Seconds of audio from the start of the video to analyze
        """
        self.media_tool = media_tool
        self.transcriber = transcriber
        self.reasoner = reasoner
        self.temp_dir = Path(temp_dir)
        self.analysis_window = analysis_window

    def _audio_path(self) -> Path:
        return self.temp_dir / f"audio-{get_timestamp_ms()}.mp3"

    def _discard_audio(self, audio_path: Path) -> None:
        try:
            remove_file(audio_path)
        except OSError as e:
            logging.warning(f"Could not remove audio file {audio_path}: {e}")

    async def analyze(self, url: str) -> AnalysisResult:
        """
        Transcribe the start of a video and ask the model for highlights.

        The audio file is removed before this returns or raises.

        Args:
            url: Video URL

        Returns:
            AnalysisResult with the full transcript and the proposed highlights
        """
        audio_path = self._audio_path()
        self.temp_dir.mkdir(parents=True, exist_ok=True)

        try:
            logging.info(f"Extracting audio: {url}")
            await self.media_tool.extract_audio(url, audio_path, self.analysis_window)

            logging.info("Transcribing...")
            transcript = await self.transcriber.transcribe(audio_path)

            logging.info(f"Analyzing {len(transcript.segments)} segments...")
            answer = await self.reasoner.propose_highlights(transcript.timestamped())

            highlights = parse_highlights(answer)
        finally:
            self._discard_audio(audio_path)

        logging.info(f"Found {len(highlights)} highlights for {url}")
        return AnalysisResult(transcription=transcript.text, highlights=highlights)
