"""Command line entry point: serve the API with uvicorn."""
import argparse
import logging
from typing import Optional, Sequence

import uvicorn

from eventhub.config import settings

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="eventhub", description="Event Hub API server")
    parser.add_argument("--host", default=settings.HOST, help="Bind address for the API")
    parser.add_argument("--port", type=int, default=settings.PORT, help="Port for the API")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logger.info("Starting Event Hub on http://%s:%s", args.host, args.port)
    uvicorn.run(
        "eventhub.main:app",
        host=args.host,
        port=args.port,
        log_level=settings.LOG_LEVEL.lower(),
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
