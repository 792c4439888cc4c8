"""
Cutting downloadable clips out of remote videos.
"""

import os
from pathlib import Path

from clipper.core.process import kill_process
from clipper.core.protocols import MediaTool, Transcoder
from clipper.models.schemas import ClipArtifact, ClipRequest
from clipper.utils.error_handling import EncodeFailure
from clipper.utils.helpers import sanitize_clip_name, unique_filename
from clipper.utils.logger import logging


class ClipMaker:
    """Streams a source video through the transcoder into the downloads directory."""

    def __init__(
        self,
        media_tool: MediaTool,
        transcoder: Transcoder,
        downloads_dir: Path,
        format_selector: str = "best[height<=720]/best",
        url_prefix: str = "/downloads",
    ):
        self.media_tool = media_tool
        self.transcoder = transcoder
        self.downloads_dir = Path(downloads_dir)
        self.format_selector = format_selector
        self.url_prefix = url_prefix.rstrip("/")

    async def create(self, request: ClipRequest) -> ClipArtifact:
        """
        Create a clip.

        The downloader writes into an OS pipe that the transcoder reads, so
        the source is never held in memory. Once the transcoder is done the
        downloader is stopped; its exit status is ignored because it fails
        with a broken pipe whenever the clip ends before the video does.

        Args:
            request: Validated clip request

        Returns:
            ClipArtifact describing the written file

        Raises:
            ToolFailure: if the downloader cannot be started
            EncodeFailure: if the transcoder fails or no file was written
        """
        safe_name = sanitize_clip_name(request.clip_name)
        filename = unique_filename(safe_name, "mp4")
        output_path = self.downloads_dir / filename
        self.downloads_dir.mkdir(parents=True, exist_ok=True)

        logging.info(f"Creating clip: {safe_name}")

        read_fd, write_fd = os.pipe()
        try:
            try:
                downloader = await self.media_tool.open_stream(
                    request.url, write_fd, self.format_selector
                )
            finally:
                os.close(write_fd)

            try:
                await self.transcoder.trim(
                    read_fd, request.start_time, request.duration, output_path
                )
            finally:
                await kill_process(downloader)
        finally:
            os.close(read_fd)

        if not output_path.is_file():
            logging.error(f"Transcoder reported success but {output_path} is missing")
            raise EncodeFailure("File not created")

        logging.info(f"Clip created: {filename}")
        return ClipArtifact(
            filename=filename,
            path=str(output_path),
            download_url=f"{self.url_prefix}/{filename}",
        )
