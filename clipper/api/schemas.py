from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Any


class VideoRequest(BaseModel):
    """Model for requests that only carry a video URL."""
    url: Optional[str] = None


class ClipCreateRequest(BaseModel):
    """Model for clip creation requests."""
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    start_time: Optional[float] = Field(default=None, alias="startTime")
    duration: Optional[float] = None
    clip_name: Optional[str] = Field(default=None, alias="clipName")


class HealthResponse(BaseModel):
    """Model for health check responses."""
    status: str = "online"
    ai: str


class VideoInfoResponse(BaseModel):
    """Model for video metadata responses."""
    success: bool = True
    title: Optional[str] = None
    duration: Optional[float] = None
    thumbnail: Optional[str] = None
    author: Optional[str] = None


class AnalysisResponse(BaseModel):
    """Model for highlight analysis responses."""
    success: bool = True
    transcription: str
    highlights: List[Any] = []


class ClipResponse(BaseModel):
    """Model for clip creation responses."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    download_url: str = Field(alias="downloadUrl")
    filename: str
