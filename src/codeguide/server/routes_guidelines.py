"""Guideline route: language and project-type specific guidance."""

from __future__ import annotations

import json

from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from codeguide.core.errors import GuidelineError
from codeguide.guidelines.markdown import format_guidelines_markdown
from codeguide.guidelines.models import GuidelineRequest
from codeguide.server.responses import bad_request, error_response


async def get_guidelines(request: Request) -> JSONResponse:
    try:
        body = await request.json()
        req = GuidelineRequest.model_validate(body)
    except (json.JSONDecodeError, ValidationError):
        return bad_request("Invalid request body")

    try:
        guidelines = request.app.state.services.guidelines.get_guidelines(req)
    except GuidelineError as e:
        return error_response(e)

    return JSONResponse(
        {
            "guidelines": [g.model_dump(mode="json") for g in guidelines],
            "markdown": format_guidelines_markdown(guidelines, language=req.language),
        }
    )


async def list_languages(request: Request) -> JSONResponse:
    return JSONResponse({"languages": request.app.state.services.guidelines.languages()})


routes = [
    Route("/api/guidelines", get_guidelines, methods=["POST"]),
    Route("/api/guidelines/languages", list_languages),
]
