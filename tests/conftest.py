"""
Configuration for pytest tests.
"""

from pathlib import Path
from typing import List, Optional

import pytest

from clipper.config import Config
from clipper.models.schemas import Transcript, TranscriptSegment, VideoMetadata
from clipper.utils.error_handling import ApiFailure, ToolFailure


class FakeProcess:
    """Stands in for a running downloader process."""

    def __init__(self):
        self.returncode = None
        self.killed = False

    def kill(self):
        self.killed = True
        self.returncode = -9

    async def wait(self):
        return self.returncode


class FakeMediaTool:
    """MediaTool double that never starts a real process."""

    def __init__(self, metadata: Optional[VideoMetadata] = None, fail_extraction: bool = False):
        self.metadata = metadata or VideoMetadata(
            title="Test Video", duration_seconds=120, thumbnail_url="https://img/t.jpg", author="Test Author"
        )
        self.fail_extraction = fail_extraction
        self.audio_paths: List[Path] = []
        self.streams: List[FakeProcess] = []

    async def probe(self, url):
        return self.metadata

    async def extract_audio(self, url, output_path, max_seconds):
        self.audio_paths.append(Path(output_path))
        if self.fail_extraction:
            raise ToolFailure("Audio extraction failed")
        Path(output_path).write_bytes(b"fake mp3 data")
        return Path(output_path)

    async def open_stream(self, url, stdout, format_selector="best[height<=720]/best"):
        process = FakeProcess()
        self.streams.append(process)
        return process


class FakeTranscoder:
    """Transcoder double; ``write_output=False`` simulates a silent failure."""

    def __init__(self, write_output: bool = True):
        self.write_output = write_output
        self.calls = []

    async def trim(self, source, start_seconds, duration_seconds, output_path):
        self.calls.append((start_seconds, duration_seconds, Path(output_path)))
        if self.write_output:
            Path(output_path).write_bytes(b"fake mp4 data")


class FakeTranscriber:
    def __init__(self, transcript: Optional[Transcript] = None, fail: bool = False):
        self.transcript = transcript or Transcript(
            text="Hallo zusammen. Heute geht es um Clips.",
            segments=[
                TranscriptSegment(start_seconds=0.0, end_seconds=3.2, text="Hallo zusammen."),
                TranscriptSegment(start_seconds=12.7, end_seconds=20.0, text="Heute geht es um Clips."),
            ],
        )
        self.fail = fail
        self.seen_audio = []

    async def transcribe(self, audio_path):
        self.seen_audio.append(Path(audio_path).exists())
        if self.fail:
            raise ApiFailure("Transcription failed: boom")
        return self.transcript


class FakeReasoner:
    def __init__(self, answer: str = "", fail: bool = False):
        self.answer = answer
        self.fail = fail
        self.prompts = []

    async def propose_highlights(self, timestamped_transcript):
        self.prompts.append(timestamped_transcript)
        if self.fail:
            raise ApiFailure("Highlight request failed: boom")
        return self.answer


@pytest.fixture
def test_config(tmp_path):
    """Configuration pointing at temporary working directories."""
    return Config(
        data_dir=tmp_path,
        downloads_dir=tmp_path / "downloads",
        temp_dir=tmp_path / "temp",
        groq_api_key="test_api_key",
    )


@pytest.fixture
def test_video_url():
    """Return a test video URL."""
    return "https://youtu.be/V3TUEeB0kW0"


@pytest.fixture
def media_tool():
    return FakeMediaTool()


@pytest.fixture
def transcriber():
    return FakeTranscriber()
