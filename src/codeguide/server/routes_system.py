"""System routes: health, version, stats."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from codeguide import __version__ as VERSION
from codeguide.repository.vector import VectorRepository


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


async def version(request: Request) -> JSONResponse:
    return JSONResponse({"version": VERSION})


async def stats(request: Request) -> JSONResponse:
    repository = request.app.state.services.rules.repository
    payload: dict = {
        "backend": type(repository).__name__,
        "rules": len(repository.all_rules()),
    }
    if isinstance(repository, VectorRepository):
        payload["collections"] = repository.collection_sizes()
    return JSONResponse(payload)


routes = [
    Route("/health", health),
    Route("/api/version", version),
    Route("/api/stats", stats),
]
