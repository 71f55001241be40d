#!/usr/bin/env python3
"""
Admin Service server entry point.

Runs the FastAPI application under uvicorn. uvicorn captures SIGINT and
SIGTERM, drains open connections for at most ``SHUTDOWN_TIMEOUT`` seconds and
then runs the lifespan shutdown, which closes the Redis connection.
"""
import signal
import sys

import uvicorn

from .core.config import get_settings
from .core.logging import configure_logging, get_logger
from .main import create_app

logger = get_logger(__name__)


def _exit_on_signal(signum, frame):
    """Exit cleanly once uvicorn hands a captured signal back to the process."""
    logger.info("admin_service_stopped", signal=signal.Signals(signum).name)
    sys.exit(0)


def main() -> None:
    """Start the Admin Service and block until it shuts down."""
    settings = get_settings()
    configure_logging(settings)

    # uvicorn restores these after its own shutdown and re-raises the signal
    signal.signal(signal.SIGTERM, _exit_on_signal)
    signal.signal(signal.SIGINT, _exit_on_signal)

    logger.info(
        "admin_service_starting",
        host=settings.host,
        port=settings.port,
        environment=settings.node_env,
    )

    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        workers=1,
        loop="asyncio",
        log_config=None,  # Use our custom logging
        access_log=False,  # Handled by our middleware
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )
    server = uvicorn.Server(config)
    try:
        server.run()
    except SystemExit as exc:
        # uvicorn exits with its own status when the lifespan fails to start
        if exc.code in (0, None):
            raise
        logger.error("admin_service_start_failed", port=settings.port, uvicorn_exit_code=exc.code)
        sys.exit(1)

    if not server.started:
        logger.error("admin_service_start_failed", port=settings.port)
        sys.exit(1)


if __name__ == "__main__":
    main()
