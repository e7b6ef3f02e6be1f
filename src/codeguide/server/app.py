"""Starlette app factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from starlette.applications import Starlette

from codeguide.bootstrap import Services
from codeguide.server.routes_guidelines import routes as guideline_routes
from codeguide.server.routes_rules import routes as rule_routes
from codeguide.server.routes_system import routes as system_routes

logger = logging.getLogger(__name__)


def create_app(services: Services) -> Starlette:
    """Create a Starlette app serving ``services``."""

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        logger.info(
            "HTTP API ready with %s backend", type(services.rules.repository).__name__
        )
        yield
        logger.info("HTTP API stopped")

    app = Starlette(
        routes=system_routes + rule_routes + guideline_routes,
        lifespan=lifespan,
    )
    app.state.services = services
    return app
