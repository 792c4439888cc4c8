"""
Data models for the Highlight Clipper service.
"""
import math
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, field_validator


class VideoMetadata(BaseModel):
    """Metadata reported by the downloader for a remote video."""
    title: Optional[str] = None
    duration_seconds: Optional[float] = None
    thumbnail_url: Optional[str] = None
    author: Optional[str] = None

    @classmethod
    def from_dump(cls, info: Dict[str, Any]) -> "VideoMetadata":
        """Build metadata from a ``yt-dlp --dump-json`` document."""
        return cls(
            title=info.get("title"),
            duration_seconds=info.get("duration"),
            thumbnail_url=info.get("thumbnail"),
            author=info.get("uploader") or info.get("channel"),
        )


class TranscriptSegment(BaseModel):
    """A time-aligned chunk of transcribed speech."""
    start_seconds: float
    text: str
    end_seconds: Optional[float] = None

    model_config = {"from_attributes": True}


class Transcript(BaseModel):
    """Full transcription result with ordered segments."""
    text: str = ""
    segments: List[TranscriptSegment] = []
    language: Optional[str] = None

    def timestamped(self) -> str:
        """Render the segments as ``[<start>s]: <text>`` lines."""
        return "\n".join(
            f"[{math.floor(segment.start_seconds)}s]: {segment.text}"
            for segment in self.segments
        )


class TranscriptionConfig(BaseModel):
    """Configuration for transcription operations."""
    model: str = "whisper-large-v3"
    language: Optional[str] = None
    prompt: Optional[str] = None
    response_format: str = "verbose_json"
    temperature: float = 0.0
    timestamp_granularities: List[str] = ["segment"]


class HighlightConfig(BaseModel):
    """Configuration for highlight reasoning operations."""
    model: str = "llama-3.3-70b-versatile"
    temperature: float = 0.3


class AnalysisResult(BaseModel):
    """Transcript plus the highlights proposed by the model.

    Highlights are passed through exactly as the model produced them.
    """
    transcription: str
    highlights: List[Any] = []


class ClipRequest(BaseModel):
    """A request to cut ``[start_time, start_time + duration)`` from a video."""
    url: str
    start_time: float
    duration: float
    clip_name: str = "clip"

    @field_validator("start_time")
    def validate_start(cls, v):
        if not math.isfinite(v) or v < 0:
            raise ValueError("start_time must be a finite, non-negative number")
        return v

    @field_validator("duration")
    def validate_duration(cls, v):
        if not math.isfinite(v) or v <= 0:
            raise ValueError("duration must be a finite, positive number")
        return v


class ClipArtifact(BaseModel):
    """A clip written to the downloads directory."""
    filename: str
    path: str
    download_url: str
