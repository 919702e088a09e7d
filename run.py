"""Unified entry point for the console screen and the development API.

Usage:
    python run.py                  # console screen against PERSON_API_BASE_URL
    python run.py --serve          # development API only
    python run.py --with-dev-api   # both, on one event loop

Configuration is read from environment variables, see
``person_registry/app/core/config.py``.
"""
import argparse
import asyncio
import logging

from uvicorn import Config, Server

from person_registry.app.console import main as console_main
from person_registry.app.core.config import settings

logger = logging.getLogger(__name__)


def build_dev_server() -> Server:
    """Create a Uvicorn server for the in‑memory development API."""
    from person_registry.app.main import app as dev_app

    config = Config(
        app=dev_app,
        host=settings.dev_api_host,
        port=settings.dev_api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    return Server(config)


async def wait_until_started(server: Server, task: asyncio.Task, poll: float = 0.05) -> bool:
    """Wait until ``server`` is accepting connections.

    Returns ``False`` if the serving task finished first (for example
    because the port was already taken).
    """
    while not server.started:
        if task.done():
            return False
        await asyncio.sleep(poll)
    return True


async def run_console() -> None:
    """Launch the console screen."""
    await console_main(settings)


async def main(serve: bool, with_dev_api: bool) -> None:
    if serve:
        await build_dev_server().serve()
        return
    if not with_dev_api:
        await run_console()
        return
    server = build_dev_server()
    api_task = asyncio.create_task(server.serve())
    try:
        if not await wait_until_started(server, api_task):
            logger.error("Development API did not start; not launching the console")
            return
        await run_console()
    finally:
        server.should_exit = True
        results = await asyncio.gather(api_task, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, asyncio.CancelledError):
                logger.error("Exception in development API", exc_info=result)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Person registry screen and development API.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--serve", action="store_true", help="run only the development API")
    mode.add_argument("--with-dev-api", action="store_true", help="run the development API next to the console")
    args = parser.parse_args()
    try:
        asyncio.run(main(args.serve, args.with_dev_api))
    except (KeyboardInterrupt, SystemExit):
        pass
