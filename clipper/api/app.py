"""
FastAPI application for the Highlight Clipper service.
"""

import asyncio
import time
from contextlib import asynccontextmanager, suppress
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from clipper.api.routes import router
from clipper.config import Config
from clipper.core.clipper import ClipMaker
from clipper.core.highlighter import GroqHighlighter
from clipper.core.janitor import run_janitor
from clipper.core.media_tool import YtDlpMediaTool
from clipper.core.pipeline import HighlightPipeline
from clipper.core.transcoder import FfmpegTranscoder
from clipper.core.transcriber import GroqTranscriber
from clipper.models.schemas import HighlightConfig, TranscriptionConfig
from clipper.utils.error_handling import register_exception_handlers
from clipper.utils.logger import logging, set_log_level


def build_pipeline(config: Config, media_tool: YtDlpMediaTool) -> Optional[HighlightPipeline]:
    """Wire the highlight pipeline, or return None when AI is disabled."""
    if not config.ai_enabled:
        return None

    transcriber = GroqTranscriber(
        TranscriptionConfig(model=config.transcription_model), api_key=config.groq_api_key
    )
    highlighter = GroqHighlighter(
        HighlightConfig(model=config.highlight_model, temperature=config.highlight_temperature),
        api_key=config.groq_api_key,
    )
    return HighlightPipeline(
        media_tool=media_tool,
        transcriber=transcriber,
        reasoner=highlighter,
        temp_dir=config.temp_dir,
        analysis_window=config.analysis_window,
    )


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Build the application.

    Args:
        config: Service configuration (read from the environment if None)

    Returns:
        FastAPI application
    """
    config = config or Config.from_env()
    config.initialize()
    set_log_level(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run the janitor for the lifetime of the application."""
        logging.info(f"{config.APP_NAME} on port {config.port}, AI {'enabled' if config.ai_enabled else 'disabled'}")
        for name, path in config.get_paths().items():
            logging.info(f"{name}: {path}")
        janitor = asyncio.create_task(
            run_janitor(
                [config.downloads_dir, config.temp_dir],
                interval=config.cleanup_interval,
                max_age=config.max_file_age,
            )
        )
        yield
        janitor.cancel()
        with suppress(asyncio.CancelledError):
            await janitor

    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        description="An API for finding highlights in videos and cutting them into clips",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Middleware to add processing time header to responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    media_tool = YtDlpMediaTool(
        binary=config.ytdlp_bin,
        probe_timeout=config.probe_timeout,
        download_timeout=config.transcode_timeout,
    )
    transcoder = FfmpegTranscoder(
        binary=config.ffmpeg_bin,
        timeout=config.transcode_timeout,
        max_output=config.max_output_bytes,
    )

    app.state.config = config
    app.state.media_tool = media_tool
    app.state.pipeline = build_pipeline(config, media_tool)
    app.state.clip_maker = ClipMaker(
        media_tool=media_tool,
        transcoder=transcoder,
        downloads_dir=config.downloads_dir,
        format_selector=config.clip_format,
    )

    register_exception_handlers(app)
    app.include_router(router)
    app.mount("/downloads", StaticFiles(directory=str(config.downloads_dir)), name="downloads")

    @app.get("/")
    async def root():
        """Root endpoint returning basic API information."""
        return {
            "name": config.APP_NAME,
            "version": config.APP_VERSION,
            "description": "Highlight Clipper API",
        }

    return app
