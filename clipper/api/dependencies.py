"""
Dependency providers for the API routes.

Components are built once in ``create_app`` and stored on ``app.state``;
tests replace them through ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Request

from clipper.config import Config
from clipper.core.clipper import ClipMaker
from clipper.core.pipeline import HighlightPipeline
from clipper.core.protocols import MediaTool


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_media_tool(request: Request) -> MediaTool:
    return request.app.state.media_tool


def get_pipeline(request: Request) -> Optional[HighlightPipeline]:
    """The highlight pipeline, or None when no API key is configured."""
    return request.app.state.pipeline


def get_clip_maker(request: Request) -> ClipMaker:
    return request.app.state.clip_maker
