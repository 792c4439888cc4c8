"""
Helper utility functions for the Highlight Clipper service.
"""

import os
import re
import time
from pathlib import Path
from typing import Optional, Union

from clipper.utils.logger import logging

MAX_NAME_LENGTH = 50
DEFAULT_CLIP_NAME = "clip"


def sanitize_clip_name(name: Optional[str], max_length: int = MAX_NAME_LENGTH) -> str:
    """
    Sanitize a user supplied clip name so it can be used as a filename base.

    Every character outside ``[A-Za-z0-9-_]`` becomes an underscore and the
    result is cut to ``max_length`` characters.

    Args:
        name: The clip name, falls back to "clip" when empty
        max_length: Maximum length of the sanitized name

    Returns:
        Sanitized name
    """
    sanitized = re.sub(r"[^a-zA-Z0-9\-_]", "_", name or DEFAULT_CLIP_NAME)
    return sanitized[:max_length]


def get_timestamp_ms() -> int:
    """Milliseconds since the epoch, used as a filename uniqueness suffix."""
    return int(time.time() * 1000)


def unique_filename(base: str, extension: str) -> str:
    """
    Build ``<base>-<timestamp>.<extension>``.

    Args:
        base: Already sanitized filename base
        extension: File extension without the dot

    Returns:
        Filename
    """
    return f"{base}-{get_timestamp_ms()}.{extension}"


def format_offset(seconds: int) -> str:
    """
    Format a whole number of seconds as ``M:SS`` (or ``H:MM:SS``).

    Args:
        seconds: Offset in seconds

    Returns:
        Formatted offset
    """
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def remove_file(path: Union[str, Path]) -> bool:
    """
    Delete a file if it exists.

    Args:
        path: File to remove

    Returns:
        True if a file was removed
    """
    if not os.path.exists(path):
        return False
    os.remove(path)
    logging.debug(f"Removed file: {path}")
    return True
