from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol

from clipper.models.schemas import Transcript, VideoMetadata


class MediaTool(Protocol):
    async def probe(self, url: str) -> VideoMetadata:
        """Return metadata for the video behind ``url``."""

    async def extract_audio(self, url: str, output_path: Path, max_seconds: int) -> Path:
        """Write the first ``max_seconds`` of audio to ``output_path``."""

    async def open_stream(self, url: str, stdout: int, format_selector: str) -> asyncio.subprocess.Process:
        """Start streaming the video bytes into the file descriptor ``stdout``."""


class Transcoder(Protocol):
    async def trim(self, source: int, start_seconds: float, duration_seconds: float, output_path: Path) -> None:
        """Re-encode ``[start, start + duration)`` of the piped source into ``output_path``."""


class Transcriber(Protocol):
    async def transcribe(self, audio_path: Path) -> Transcript:
        """Return the transcript with segment-level timestamps."""


class HighlightReasoner(Protocol):
    async def propose_highlights(self, timestamped_transcript: str) -> str:
        """Return the raw model answer for the transcript."""
