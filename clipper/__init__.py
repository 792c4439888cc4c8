"""
Highlight Clipper service.

This service looks up metadata for remote videos, proposes highlight clips
from their transcripts using LLM models, and cuts downloadable sub-clips.
"""

__version__ = "0.2.0"
