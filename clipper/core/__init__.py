"""
Core functionality for the Highlight Clipper service.

This package contains the adapters for the external download and transcoding
tools, the Groq speech and chat clients, the highlight pipeline, clip
creation and the janitor.
"""
