# python run_console.py               (talk to the database directly)
# python run_console.py --http URL    (go through a running API)
import argparse
import logging

import httpx

from tracker.config import API_BASE_URL
from tracker.engine import Engine
from tracker.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Study tracker console")
    parser.add_argument(
        "--http",
        nargs="?",
        const=API_BASE_URL,
        metavar="URL",
        help=f"use the HTTP API instead of the database (default URL: {API_BASE_URL})",
    )
    args = parser.parse_args(argv)

    setup_logging()

    try:
        if args.http:
            from tracker.http_interface import HttpInterface

            with httpx.Client(base_url=args.http, timeout=10.0) as client:
                Engine(HttpInterface(client)).start()
        else:
            from tracker.text_interface import TextInterface

            Engine(TextInterface()).start()
    except (KeyboardInterrupt, EOFError):
        print()
        print("Exiting...")
    except httpx.HTTPError as e:
        logger.error("Could not reach the API at %s: %s", args.http, e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
