"""Uvicorn launcher."""

from __future__ import annotations

import logging

from codeguide.bootstrap import build_services
from codeguide.config import CodeguideConfig, load_config

logger = logging.getLogger(__name__)


def run_server(config: CodeguideConfig | None = None) -> None:
    """Start the HTTP API server with uvicorn."""
    import uvicorn

    from codeguide.server.app import create_app

    if config is None:
        config = load_config()

    app = create_app(build_services(config))
    logger.info("Serving HTTP API on %s:%d", config.server.host, config.server.port)
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )
