"""
API routes for the Highlight Clipper service.
"""

import math
from typing import Optional

from fastapi import APIRouter, Depends

from clipper.api.dependencies import get_clip_maker, get_config, get_media_tool, get_pipeline
from clipper.api.schemas import (
    AnalysisResponse,
    ClipCreateRequest,
    ClipResponse,
    HealthResponse,
    VideoInfoResponse,
    VideoRequest,
)
from clipper.config import Config
from clipper.core.clipper import ClipMaker
from clipper.core.pipeline import HighlightPipeline
from clipper.core.protocols import MediaTool
from clipper.models.schemas import ClipRequest
from clipper.utils.error_handling import NotConfigured, ValidationError
from clipper.utils.logger import logging

router = APIRouter(prefix="/api", tags=["clips"])


def require_url(url: Optional[str]) -> str:
    if not url or not url.strip():
        raise ValidationError("URL missing")
    return url.strip()


@router.get("/health", response_model=HealthResponse)
async def health(config: Config = Depends(get_config)):
    """Service status and whether AI analysis is available."""
    return HealthResponse(status="online", ai="enabled" if config.ai_enabled else "disabled")


@router.post("/video-info", response_model=VideoInfoResponse)
async def video_info(request: VideoRequest, media_tool: MediaTool = Depends(get_media_tool)):
    """Look up title, duration, thumbnail and author of a video."""
    url = require_url(request.url)
    metadata = await media_tool.probe(url)
    logging.info(f"Video info: {metadata.title}")

    return VideoInfoResponse(
        title=metadata.title,
        duration=metadata.duration_seconds,
        thumbnail=metadata.thumbnail_url,
        author=metadata.author,
    )


@router.post("/analyze-video", response_model=AnalysisResponse)
async def analyze_video(
    request: VideoRequest,
    pipeline: Optional[HighlightPipeline] = Depends(get_pipeline),
):
    """
    Transcribe the start of a video and propose highlight clips.

    - Only the first ten minutes are analyzed
    - Highlights are returned as produced by the model, unvalidated
    """
    url = require_url(request.url)
    if pipeline is None:
        raise NotConfigured("AI not configured")

    result = await pipeline.analyze(url)
    return AnalysisResponse(transcription=result.transcription, highlights=result.highlights)


@router.post("/create-clip", response_model=ClipResponse)
async def create_clip(
    request: ClipCreateRequest,
    clip_maker: ClipMaker = Depends(get_clip_maker),
):
    """Cut ``duration`` seconds starting at ``startTime`` into a downloadable mp4."""
    url = (request.url or "").strip()
    if not url or request.start_time is None or not request.duration:
        raise ValidationError("Parameters missing")
    if not math.isfinite(request.start_time) or not math.isfinite(request.duration):
        raise ValidationError("startTime and duration must be finite numbers")
    if request.start_time < 0 or request.duration < 0:
        raise ValidationError("startTime and duration must not be negative")

    clip_request = ClipRequest(
        url=url,
        start_time=request.start_time,
        duration=request.duration,
        clip_name=request.clip_name or "clip",
    )
    artifact = await clip_maker.create(clip_request)

    return ClipResponse(download_url=artifact.download_url, filename=artifact.filename)
