"""Wire models for the line-delimited JSON protocol."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class ErrorCode(StrEnum):
    INVALID_PARAMS = "invalid_params"
    METHOD_NOT_FOUND = "method_not_found"
    INTERNAL_ERROR = "internal_error"


class ServerInfo(BaseModel):
    name: str
    version: str


class JSONSchema(BaseModel):
    type: str
    description: str | None = None
    properties: dict[str, JSONSchema] | None = None
    required: list[str] | None = None
    additionalProperties: JSONSchema | None = None


class ToolInfo(BaseModel):
    name: str
    description: str
    input_schema: JSONSchema


class Content(BaseModel):
    type: str
    text: str


class ErrorPayload(BaseModel):
    code: ErrorCode
    message: str


class ProtocolError(Exception):
    """Raised inside a request handler; becomes an ``{"error": ...}`` line."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def payload(self) -> ErrorPayload:
        return ErrorPayload(code=self.code, message=self.message)


class RpcRequest(BaseModel):
    method: str = ""
    params: Any = None


class CallToolRequest(BaseModel):
    name: str
    arguments: dict[str, Any] | None = None


class ListToolsResponse(BaseModel):
    tools: list[ToolInfo]


class CallToolResponse(BaseModel):
    content: list[Content]
