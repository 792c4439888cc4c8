"""
Video metadata, audio and stream access through yt-dlp.
"""

import json
import asyncio
from pathlib import Path

from clipper.core.process import ProcessOutputLimit, ProcessTimeout, run_process
from clipper.models.schemas import VideoMetadata
from clipper.utils.error_handling import MediaNotFound, ParseFailure, ToolFailure
from clipper.utils.helpers import format_offset
from clipper.utils.logger import logging


class YtDlpMediaTool:
    """Class to handle yt-dlp invocations."""

    def __init__(
        self,
        binary: str = "yt-dlp",
        probe_timeout: float = 60.0,
        download_timeout: float = 300.0,
        audio_quality: int = 5,
    ):
        """
        Initialize the media tool.

        Args:
            binary: Name or path of the yt-dlp executable
            probe_timeout: Seconds allowed for a metadata lookup
            download_timeout: Seconds allowed for an audio download
            audio_quality: yt-dlp audio quality (0 best, 10 worst)
        """
        self.binary = binary
        self.probe_timeout = probe_timeout
        self.download_timeout = download_timeout
        self.audio_quality = audio_quality

    async def probe(self, url: str) -> VideoMetadata:
        """
        Look up metadata for a video.

        Args:
            url: Video URL

        Returns:
            VideoMetadata

        Raises:
            MediaNotFound: if yt-dlp fails or times out
            ParseFailure: if yt-dlp does not print a JSON object
        """
        cmd = [self.binary, "--dump-json", "--no-warnings", "--", url]
        try:
            result = await run_process(cmd, timeout=self.probe_timeout)
        except (OSError, ProcessTimeout) as e:
            logging.error(f"Probe failed for {url}: {e}")
            raise MediaNotFound("Video not found") from e

        if not result.ok:
            logging.error(f"Probe failed for {url}: {result.stderr_tail()}")
            raise MediaNotFound("Video not found")

        try:
            info = json.loads(result.stdout)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logging.error(f"Unreadable probe output for {url}: {e}")
            raise ParseFailure("Parsing error") from e

        if not isinstance(info, dict):
            raise ParseFailure("Parsing error")

        return VideoMetadata.from_dump(info)

    async def extract_audio(self, url: str, output_path: Path, max_seconds: int) -> Path:
        """
        Download the first ``max_seconds`` of a video's audio as mp3.

        Args:
            url: Video URL
            output_path: Target mp3 file
            max_seconds: Length of the section to download

        Returns:
            Path to the audio file

        Raises:
            ToolFailure: if yt-dlp fails, times out or writes no file
        """
        cmd = [
            self.binary,
            "-x",
            "--audio-format", "mp3",
            "--audio-quality", str(self.audio_quality),
            "-o", str(output_path),
            "--download-sections", f"*0:00-{format_offset(max_seconds)}",
            "--", url,
        ]
        try:
            result = await run_process(cmd, timeout=self.download_timeout)
        except (OSError, ProcessTimeout, ProcessOutputLimit) as e:
            raise ToolFailure(f"Audio extraction failed: {e}") from e

        if not result.ok:
            raise ToolFailure(f"Audio extraction failed: {result.stderr_tail()}")
        if not Path(output_path).is_file():
            raise ToolFailure("Audio extraction produced no file")

        return Path(output_path)

    async def open_stream(
        self, url: str, stdout: int, format_selector: str = "best[height<=720]/best"
    ) -> asyncio.subprocess.Process:
        """
        Start writing the video to a file descriptor.

        Args:
            url: Video URL
            stdout: Writable file descriptor, usually one end of a pipe
            format_selector: yt-dlp format selection

        Returns:
            The running yt-dlp process
        """
        cmd = [self.binary, "-f", format_selector, "-o", "-", "--no-warnings", "--", url]
        logging.debug(f"Streaming: {' '.join(cmd)}")
        try:
            return await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=stdout,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise ToolFailure(f"Could not start {self.binary}: {e}") from e
