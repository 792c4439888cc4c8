"""
Command line entry point for the Highlight Clipper service.

Runs the same operations as the HTTP API without starting a server.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as ModelValidationError

from clipper.api.app import build_pipeline
from clipper.config import Config
from clipper.core.clipper import ClipMaker
from clipper.core.media_tool import YtDlpMediaTool
from clipper.core.transcoder import FfmpegTranscoder
from clipper.models.schemas import AnalysisResult, ClipRequest
from clipper.utils.error_handling import ClipperError, NotConfigured
from clipper.utils.logger import logging


def save_analysis(result: AnalysisResult, output_file: str) -> Path:
    """Save an analysis result to a JSON file."""
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result.model_dump(), f, indent=2, ensure_ascii=False)

    logging.info(f"Analysis saved to: {output_path}")
    return output_path


async def run_command(args: argparse.Namespace, config: Config) -> dict:
    media_tool = YtDlpMediaTool(
        binary=config.ytdlp_bin,
        probe_timeout=config.probe_timeout,
        download_timeout=config.transcode_timeout,
    )

    if args.command == "info":
        metadata = await media_tool.probe(args.url)
        return metadata.model_dump()

    if args.command == "analyze":
        pipeline = build_pipeline(config, media_tool)
        if pipeline is None:
            raise NotConfigured("AI not configured")
        result = await pipeline.analyze(args.url)
        if args.output:
            save_analysis(result, args.output)
        return result.model_dump()

    transcoder = FfmpegTranscoder(
        binary=config.ffmpeg_bin,
        timeout=config.transcode_timeout,
        max_output=config.max_output_bytes,
    )
    clip_maker = ClipMaker(media_tool, transcoder, config.downloads_dir, config.clip_format)
    artifact = await clip_maker.create(
        ClipRequest(url=args.url, start_time=args.start, duration=args.duration, clip_name=args.name)
    )
    return artifact.model_dump()


def main(argv: Optional[list] = None) -> int:
    """Main function to run the application from command line."""
    parser = argparse.ArgumentParser(description="Highlight Clipper")
    subparsers = parser.add_subparsers(dest="command", required=True)

    info_parser = subparsers.add_parser("info", help="Show video metadata")
    info_parser.add_argument("url", help="Video URL")

    analyze_parser = subparsers.add_parser("analyze", help="Propose highlight clips")
    analyze_parser.add_argument("url", help="Video URL")
    analyze_parser.add_argument("--output", help="Output file path for the analysis")

    clip_parser = subparsers.add_parser("clip", help="Cut a clip")
    clip_parser.add_argument("url", help="Video URL")
    clip_parser.add_argument("--start", type=float, required=True, help="Start offset in seconds")
    clip_parser.add_argument("--duration", type=float, required=True, help="Clip length in seconds")
    clip_parser.add_argument("--name", default="clip", help="Clip name")

    args = parser.parse_args(argv)

    config = Config.from_env()
    config.initialize()

    try:
        output = asyncio.run(run_command(args, config))
    except ClipperError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except ModelValidationError as e:
        reasons = "; ".join(error["msg"] for error in e.errors())
        print(f"Error: {reasons}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
