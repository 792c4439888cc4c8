"""
Configuration settings for the Highlight Clipper service.
"""

import os
from typing import Dict, Optional
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel


BASE_DIR = Path(__file__).resolve().parent.parent.absolute()


class Config(BaseModel):
    """Service configuration, built once at startup and passed to components."""

    # Application info
    APP_NAME: str = "Highlight Clipper"
    APP_VERSION: str = "0.2.0"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "DEBUG"

    # Working directories
    data_dir: Path = BASE_DIR / "data"
    downloads_dir: Path = BASE_DIR / "data" / "downloads"
    temp_dir: Path = BASE_DIR / "data" / "temp"

    # API keys
    groq_api_key: Optional[str] = None

    # Default models
    transcription_model: str = "whisper-large-v3"
    highlight_model: str = "llama-3.3-70b-versatile"
    highlight_temperature: float = 0.3

    # External tools
    ytdlp_bin: str = "yt-dlp"
    ffmpeg_bin: str = "ffmpeg"

    # Timeouts and limits (seconds / bytes)
    probe_timeout: float = 60.0
    transcode_timeout: float = 300.0
    max_output_bytes: int = 200 * 1024 * 1024
    analysis_window: int = 600
    clip_format: str = "best[height<=720]/best"

    # Janitor
    cleanup_interval: float = 1800.0
    max_file_age: float = 3600.0

    @property
    def ai_enabled(self) -> bool:
        return bool(self.groq_api_key)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Config":
        """
        Build a configuration from environment variables.

        Args:
            env_file: Optional path to a .env file (defaults to the usual lookup)

        Returns:
            Config instance
        """
        load_dotenv(env_file)

        environment = os.getenv("ENVIRONMENT", "development").lower()
        data_dir = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level="INFO" if environment == "production" else "DEBUG",
            data_dir=data_dir,
            downloads_dir=Path(os.getenv("DOWNLOADS_DIR", str(data_dir / "downloads"))),
            temp_dir=Path(os.getenv("TEMP_DIR", str(data_dir / "temp"))),
            groq_api_key=os.getenv("GROQ_API_KEY") or None,
            transcription_model=os.getenv("TRANSCRIPTION_MODEL", "whisper-large-v3"),
            highlight_model=os.getenv("HIGHLIGHT_MODEL", "llama-3.3-70b-versatile"),
            ytdlp_bin=os.getenv("YTDLP_BIN", "yt-dlp"),
            ffmpeg_bin=os.getenv("FFMPEG_BIN", "ffmpeg"),
        )

    def initialize(self) -> None:
        """Create the working directories."""
        self.downloads_dir.mkdir(parents=True, exist_ok=True)
        self.temp_dir.mkdir(parents=True, exist_ok=True)

        if not self.groq_api_key:
            print("WARNING: GROQ_API_KEY environment variable not set.")
            print("AI analysis is disabled; metadata and clip routes stay available.")

    def get_paths(self) -> Dict[str, Path]:
        """Get all application paths."""
        return {
            "base_dir": BASE_DIR,
            "data_dir": self.data_dir,
            "downloads_dir": self.downloads_dir,
            "temp_dir": self.temp_dir,
        }
