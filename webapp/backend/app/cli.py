# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""
CLI for the metroplan web backend.

Usage:
    python -m webapp.backend.app.cli --host 0.0.0.0 --port 8000
"""
from __future__ import annotations

import logging
import os

import typer
import uvicorn

logging.basicConfig(
    level=os.getenv("METROPLAN_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
LOGGER = logging.getLogger("metroplan.serve")


def serve(
    host: str = typer.Option(
        os.getenv("METROPLAN_HOST", "127.0.0.1"),
        "--host",
        help="Host address to bind the server to.",
    ),
    port: int = typer.Option(
        int(os.getenv("METROPLAN_PORT", "8000")),
        "--port",
        help="Port number to listen on.",
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Uvicorn log level (debug, info, warning, error, critical).",
    ),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
) -> None:
    """Start the metroplan web backend."""
    LOGGER.info("Starting metroplan web backend")
    LOGGER.info("  Host: %s", host)
    LOGGER.info("  Port: %d", port)

    uvicorn.run(
        "webapp.backend.app.main:app",
        host=host,
        port=port,
        log_level=log_level,
        reload=reload,
    )


def main() -> None:
    """CLI entry point."""
    typer.run(serve)


if __name__ == "__main__":
    main()
