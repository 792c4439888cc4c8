"""
FastAPI server entry point for the Highlight Clipper service.
"""

import os
import argparse
import uvicorn

from clipper.api.app import create_app
from clipper.config import Config


def main():
    """Run the FastAPI server."""
    # Load configuration (reads .env)
    config = Config.from_env()

    # Parse command line arguments
    parser = argparse.ArgumentParser(description="Highlight Clipper API")
    parser.add_argument("--host", default=config.host, help="Host to bind the server to")
    parser.add_argument("--port", type=int, default=config.port, help="Port to bind the server to")
    args = parser.parse_args()

    config = config.model_copy(update={"host": args.host, "port": args.port})

    # Print startup info
    print("=" * 41)
    print(f"Starting {config.APP_NAME} API server v{config.APP_VERSION}")
    print(f"Environment: {os.getenv('ENVIRONMENT', 'development')}")
    print(f"Binding to: {config.host}:{config.port}")
    print(f"AI: {'enabled' if config.ai_enabled else 'disabled'}")
    print("=" * 41)

    # Run the server
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
