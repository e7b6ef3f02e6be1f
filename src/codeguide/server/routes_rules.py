"""Rule routes: codestyle, rule lookups, templates, examples, validation, search."""

from __future__ import annotations

import json

from pydantic import BaseModel, ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from codeguide.core.errors import GuidelineError
from codeguide.core.service import RuleService
from codeguide.rules.models import Rule
from codeguide.server.responses import bad_request, error_response


class ValidateRequest(BaseModel):
    code: str
    context: str


def _service(request: Request) -> RuleService:
    return request.app.state.services.rules


def _dump(rules: list[Rule]) -> dict:
    return {"rules": [r.model_dump(mode="json") for r in rules], "count": len(rules)}


async def codestyle(request: Request) -> JSONResponse:
    params = request.query_params
    output = params.get("format", "text")
    if output not in ("text", "markdown"):
        return bad_request("format must be text or markdown")
    try:
        text = _service(request).codestyle(
            params.get("categories", ""),
            language=params.get("language"),
            keywords=params.get("keywords", ""),
            markdown=output == "markdown",
        )
    except GuidelineError as e:
        return error_response(e)
    return JSONResponse({"text": text})


async def list_rules(request: Request) -> JSONResponse:
    """Filter by exactly one of category, type or context; no filter lists every rule."""
    params = request.query_params
    filters = {k: params[k] for k in ("category", "type", "context") if params.get(k)}
    if len(filters) > 1:
        return bad_request("use only one of category, type, context")

    service = _service(request)
    try:
        if "category" in filters:
            rules = service.get_rules_by_category(filters["category"])
        elif "type" in filters:
            rules = service.get_rules_by_type(filters["type"])
        elif "context" in filters:
            rules = service.get_applicable_rules(filters["context"])
        else:
            rules = service.all_rules()
    except GuidelineError as e:
        return error_response(e)
    return JSONResponse(_dump(rules))


async def get_template(request: Request) -> JSONResponse:
    name = request.path_params["name"]
    try:
        template = _service(request).get_template(name)
    except GuidelineError as e:
        return error_response(e)
    return JSONResponse({"rule": name, "template": template})


async def get_examples(request: Request) -> JSONResponse:
    name = request.path_params["name"]
    try:
        examples = _service(request).get_examples(name)
    except GuidelineError as e:
        return error_response(e)
    return JSONResponse(
        {"rule": name, "examples": [ex.model_dump(mode="json") for ex in examples]}
    )


async def validate(request: Request) -> JSONResponse:
    try:
        body = await request.json()
        req = ValidateRequest.model_validate(body)
    except (json.JSONDecodeError, ValidationError):
        return bad_request("Invalid request: 'code' and 'context' are required")

    try:
        result = _service(request).validate_code(req.code, req.context)
    except GuidelineError as e:
        return error_response(e)
    return JSONResponse(result.model_dump(mode="json"))


async def search(request: Request) -> JSONResponse:
    query = request.query_params.get("query")
    if not query:
        return bad_request("query parameter required")
    try:
        limit = int(request.query_params.get("limit", "5"))
    except ValueError:
        return bad_request("limit must be an integer")

    try:
        rules = _service(request).search_similar(query, limit)
    except GuidelineError as e:
        return error_response(e)
    return JSONResponse(_dump(rules))


routes = [
    Route("/api/codestyle", codestyle),
    Route("/api/rules", list_rules),
    Route("/api/rules/{name}/template", get_template),
    Route("/api/rules/{name}/examples", get_examples),
    Route("/api/validate", validate, methods=["POST"]),
    Route("/api/search", search),
]
