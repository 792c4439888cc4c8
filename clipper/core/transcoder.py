"""
Clip re-encoding through ffmpeg.
"""

from pathlib import Path

from clipper.core.process import ProcessOutputLimit, ProcessTimeout, run_process
from clipper.utils.error_handling import EncodeFailure, ValidationError
from clipper.utils.helpers import remove_file
from clipper.utils.logger import logging


class FfmpegTranscoder:
    """Trim a piped source into an H.264/AAC mp4 file."""

    def __init__(
        self,
        binary: str = "ffmpeg",
        timeout: float = 300.0,
        max_output: int = 200 * 1024 * 1024,
        preset: str = "ultrafast",
    ):
        self.binary = binary
        self.timeout = timeout
        self.max_output = max_output
        self.preset = preset

    def build_command(self, start_seconds: float, duration_seconds: float, output_path: Path) -> list:
        return [
            self.binary,
            "-ss", f"{start_seconds:g}",
            "-i", "pipe:0",
            "-t", f"{duration_seconds:g}",
            "-c:v", "libx264",
            "-preset", self.preset,
            "-c:a", "aac",
            "-y", str(output_path),
        ]

    async def trim(self, source: int, start_seconds: float, duration_seconds: float, output_path: Path) -> None:
        """
        Re-encode a section of the source stream.

        Args:
            source: Readable file descriptor carrying the source video
            start_seconds: Offset of the clip start
            duration_seconds: Clip length
            output_path: Destination file, written by ffmpeg directly

        Raises:
            ValidationError: if the interval is invalid
            EncodeFailure: on timeout, output overflow or non-zero exit
        """
        if start_seconds < 0:
            raise ValidationError("Start time must not be negative")
        if duration_seconds <= 0:
            raise ValidationError("Duration must be positive")

        cmd = self.build_command(start_seconds, duration_seconds, output_path)
        try:
            result = await run_process(cmd, timeout=self.timeout, stdin=source, max_output=self.max_output)
        except (OSError, ProcessTimeout, ProcessOutputLimit) as e:
            logging.error(f"Transcoding failed: {e}")
            remove_file(output_path)
            raise EncodeFailure("Clip creation failed") from e

        if not result.ok:
            logging.error(f"ffmpeg exited with {result.returncode}: {result.stderr_tail()}")
            remove_file(output_path)
            raise EncodeFailure("Clip creation failed")
