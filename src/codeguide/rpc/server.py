"""Line-delimited JSON server: one request object per input line, one response per output line."""

from __future__ import annotations

import io
import json
import logging
import sys
from typing import Any, TextIO

from pydantic import ValidationError

from codeguide import __version__
from codeguide.core.errors import InvalidRequestError, NotSupportedError
from codeguide.guidelines.markdown import format_guidelines_markdown
from codeguide.guidelines.models import GuidelineRequest
from codeguide.guidelines.service import GuidelineService
from codeguide.rpc.models import (
    CallToolRequest,
    CallToolResponse,
    Content,
    ErrorCode,
    JSONSchema,
    ListToolsResponse,
    ProtocolError,
    RpcRequest,
    ServerInfo,
    ToolInfo,
)

GET_GUIDELINES_TOOL = ToolInfo(
    name="get_guidelines",
    description="Get code guidelines for a specific programming language and project type",
    input_schema=JSONSchema(
        type="object",
        properties={
            "language": JSONSchema(
                type="string", description="Programming language (e.g., 'go', 'python')"
            ),
            "project_type": JSONSchema(
                type="string", description="Type of project (e.g., 'api', 'cli', 'library')"
            ),
            "options": JSONSchema(
                type="object",
                additionalProperties=JSONSchema(type="string"),
                description="Additional options for customizing guidelines",
            ),
        },
        required=["language", "project_type"],
    ),
)


class JsonLineServer:
    """Serves ``list_tools`` and ``call_tool`` over a pair of text streams.

    Every request line gets exactly one response line. Request-level failures
    are written as ``{"error": {"code": ..., "message": ...}}`` and the loop
    carries on; only a failure to write ends the server.
    """

    def __init__(
        self,
        guidelines: GuidelineService,
        reader: TextIO | None = None,
        writer: TextIO | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.info = ServerInfo(name="code-guidelines", version=__version__)
        self._guidelines = guidelines
        self._reader = reader if reader is not None else _stdin()
        self._writer = writer if writer is not None else sys.stdout
        self._logger = logger or logging.getLogger(__name__)

    def run(self) -> None:
        self._logger.info("Code guidelines server started")
        for line in self._reader:
            if not line.strip():
                continue
            self._write(self.handle_line(line))
        self._logger.info("Input closed, server stopping")

    def handle_line(self, line: str) -> dict[str, Any]:
        try:
            raw = json.loads(line)
            request = RpcRequest.model_validate(raw)
        except (json.JSONDecodeError, ValidationError):
            return _error(ErrorCode.INVALID_PARAMS, "invalid JSON request")

        try:
            if request.method == "list_tools":
                response: ListToolsResponse | CallToolResponse = self.list_tools()
            elif request.method == "call_tool":
                response = self.call_tool(request.params)
            else:
                raise ProtocolError(
                    ErrorCode.METHOD_NOT_FOUND, f"unknown method: {request.method}"
                )
        except ProtocolError as e:
            return {"error": e.payload().model_dump(mode="json")}

        return response.model_dump(mode="json", exclude_none=True)

    def list_tools(self) -> ListToolsResponse:
        return ListToolsResponse(tools=[GET_GUIDELINES_TOOL])

    def call_tool(self, params: Any) -> CallToolResponse:
        try:
            call = CallToolRequest.model_validate(params)
        except ValidationError as e:
            raise ProtocolError(
                ErrorCode.INVALID_PARAMS, f"invalid call_tool params: {_first_error(e)}"
            ) from e

        if call.name == "get_guidelines":
            return self._get_guidelines(call.arguments or {})
        raise ProtocolError(ErrorCode.METHOD_NOT_FOUND, f"unknown tool: {call.name}")

    def _get_guidelines(self, arguments: dict[str, Any]) -> CallToolResponse:
        try:
            request = GuidelineRequest.model_validate(arguments)
        except ValidationError as e:
            raise ProtocolError(
                ErrorCode.INVALID_PARAMS, f"invalid request format: {_first_error(e)}"
            ) from e

        try:
            guidelines = self._guidelines.get_guidelines(request)
        except (InvalidRequestError, NotSupportedError) as e:
            raise ProtocolError(ErrorCode.INVALID_PARAMS, str(e)) from e
        except Exception as e:
            self._logger.exception("failed to get guidelines")
            raise ProtocolError(ErrorCode.INTERNAL_ERROR, "internal server error") from e

        markdown = format_guidelines_markdown(guidelines, language=request.language)
        return CallToolResponse(content=[Content(type="markdown", text=markdown)])

    def _write(self, payload: dict[str, Any]) -> None:
        self._writer.write(json.dumps(payload) + "\n")
        self._writer.flush()


def _stdin() -> TextIO:
    # Undecodable bytes must reach handle_line as a bad request, not end the loop.
    return io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace")


def _error(code: ErrorCode, message: str) -> dict[str, Any]:
    return {"error": {"code": code.value, "message": message}}


def _first_error(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return str(e)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{loc}: {first['msg']}" if loc else first["msg"]
