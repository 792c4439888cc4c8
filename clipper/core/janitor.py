"""
Periodic removal of stale files from the working directories.
"""

import asyncio
import os
import time
from pathlib import Path
from typing import Iterable, Optional

from clipper.utils.logger import logging


def sweep(directories: Iterable[Path], max_age: float, now: Optional[float] = None) -> int:
    """
    Delete every file older than ``max_age`` seconds.

    A file that cannot be removed (e.g. it vanished in the meantime) is
    skipped without stopping the sweep.

    Args:
        directories: Directories to clean; missing ones are ignored
        max_age: Maximum age in seconds, by modification time
        now: Reference time, defaults to the current time

    Returns:
        Number of removed files
    """
    cutoff = (now if now is not None else time.time()) - max_age
    removed = 0

    for directory in directories:
        directory = Path(directory)
        if not directory.is_dir():
            continue
        for entry in directory.iterdir():
            try:
                if entry.stat().st_mtime < cutoff:
                    os.remove(entry)
                    removed += 1
            except OSError as e:
                logging.debug(f"Skipping {entry}: {e}")

    if removed:
        logging.info(f"Janitor removed {removed} stale file(s)")
    return removed


async def run_janitor(directories: Iterable[Path], interval: float = 1800.0, max_age: float = 3600.0) -> None:
    """Sweep ``directories`` every ``interval`` seconds until cancelled."""
    directories = [Path(d) for d in directories]
    logging.info(f"Janitor started, sweeping every {interval:.0f}s")
    while True:
        await asyncio.sleep(interval)
        await asyncio.to_thread(sweep, directories, max_age)
