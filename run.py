"""Entry point for the Bookmark Manager API server.

This script builds the FastAPI application around a bookmark store and
serves it with Uvicorn.  Host, port, backing file and log level default
to the values in ``core.config`` (and therefore to the ``HOST``,
``PORT``, ``DATA_FILE`` and ``LOG_LEVEL`` environment variables) and
can be overridden on the command line.

Usage:
    python run.py --port 3001 --data-file ./bookmarks.json
"""
import argparse
import asyncio
import logging

from uvicorn import Config, Server

from bookmark_manager_api.app.core.config import settings
from bookmark_manager_api.app.core.logging_config import setup_logging
from bookmark_manager_api.app.main import create_app
from bookmark_manager_api.app.services.bookmark_service import BookmarkService


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Run the Bookmark Manager API server.")
    ap.add_argument("--host", default=settings.host, help="Interface to bind (default: %(default)s)")
    ap.add_argument("--port", type=int, default=settings.port, help="Port to listen on (default: %(default)s)")
    ap.add_argument("--data-file", default=settings.data_file, help="Backing JSON file (default: %(default)s)")
    ap.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    return ap.parse_args(argv)


async def main(argv=None) -> None:
    """Load the store and serve the API until interrupted."""
    args = parse_args(argv)
    setup_logging(args.log_level, settings.log_file or None)
    service = BookmarkService(args.data_file)
    app = create_app(service)
    logging.getLogger(__name__).info(
        "Bookmark Manager API server running on http://%s:%s", args.host, args.port
    )
    config = Config(app=app, host=args.host, port=args.port, reload=False, log_level=args.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
