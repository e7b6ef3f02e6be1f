"""MCP stdio server exposing the rule engine as tools."""

from __future__ import annotations

import json
import logging

import anyio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.stdio import stdio_server

from codeguide import __version__
from codeguide.bootstrap import Services
from codeguide.core.errors import InvalidRequestError, NotFoundError
from codeguide.guidelines.markdown import format_guidelines_markdown
from codeguide.guidelines.models import GuidelineRequest
from codeguide.rules.models import Rule

logger = logging.getLogger(__name__)

CODESTYLE_DESCRIPTION = """\
Retrieve coding style rules and examples for generating idiomatic code.

Use this tool before writing or changing code to learn the project's naming,
documentation, testing and structure conventions.

Input:
- categories: comma-separated rule categories, for example
  "documentation", "testing", "code", "template"
- language: optional programming language; rules bound to another language are skipped
- keywords: optional comma-separated tags; rules without keywords always match

Returns the matching rules as compact text, separated by '---' lines.
"""

CODESTYLE_SCHEMA = {
    "type": "object",
    "properties": {
        "categories": {
            "type": "string",
            "description": "Comma-separated list of rule categories",
        },
        "language": {"type": "string", "description": "Programming language filter"},
        "keywords": {"type": "string", "description": "Comma-separated keyword filter"},
    },
    "required": ["categories"],
}

CATEGORY_SCHEMA = {
    "type": "object",
    "properties": {"category": {"type": "string", "description": "Exact rule category"}},
    "required": ["category"],
}

TYPE_SCHEMA = {
    "type": "object",
    "properties": {
        "type": {
            "type": "string",
            "description": "Rule type, e.g. pattern, constraint, template, naming",
        }
    },
    "required": ["type"],
}

CONTEXT_SCHEMA = {
    "type": "object",
    "properties": {
        "context": {"type": "string", "description": "Code context, e.g. function, struct"}
    },
    "required": ["context"],
}

RULE_NAME_SCHEMA = {
    "type": "object",
    "properties": {"rule_name": {"type": "string", "description": "Rule name"}},
    "required": ["rule_name"],
}

VALIDATE_SCHEMA = {
    "type": "object",
    "properties": {
        "code": {"type": "string", "description": "Code snippet to validate"},
        "context": {"type": "string", "description": "Context whose rules apply"},
    },
    "required": ["code", "context"],
}

SEARCH_SCHEMA = {
    "type": "object",
    "properties": {
        "query": {"type": "string", "description": "Free-text description of what you need"},
        "limit": {"type": "integer", "description": "Max results (default: 5)", "default": 5},
    },
    "required": ["query"],
}

GUIDELINES_SCHEMA = {
    "type": "object",
    "properties": {
        "language": {"type": "string", "description": "Programming language (e.g. 'go')"},
        "project_type": {
            "type": "string",
            "description": "Type of project (e.g. 'api', 'cli', 'library')",
        },
        "options": {
            "type": "object",
            "additionalProperties": {"type": "string"},
            "description": "Additional options for customizing guidelines",
        },
    },
    "required": ["language", "project_type"],
}


def _rules_json(rules: list[Rule]) -> str:
    return json.dumps([r.model_dump(mode="json") for r in rules], indent=2)


def _required(args: dict, key: str):
    if key not in args:
        raise InvalidRequestError(f"missing required argument: {key}")
    return args[key]


def create_mcp_server(services: Services) -> Server:
    """Create and configure the MCP server over ``services``."""
    server = Server("codeguide", __version__)
    rules = services.rules

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name="codestyle",
                description=CODESTYLE_DESCRIPTION,
                inputSchema=CODESTYLE_SCHEMA,
            ),
            types.Tool(
                name="get_rules_by_category",
                description="Get all rules in a category as JSON.",
                inputSchema=CATEGORY_SCHEMA,
            ),
            types.Tool(
                name="get_rules_by_type",
                description="Get all rules of a type as JSON.",
                inputSchema=TYPE_SCHEMA,
            ),
            types.Tool(
                name="get_applicable_rules",
                description="Get the rules that apply to a code context as JSON.",
                inputSchema=CONTEXT_SCHEMA,
            ),
            types.Tool(
                name="get_template",
                description="Get the code template of a rule.",
                inputSchema=RULE_NAME_SCHEMA,
            ),
            types.Tool(
                name="get_examples",
                description="Get the examples of a rule as JSON.",
                inputSchema=RULE_NAME_SCHEMA,
            ),
            types.Tool(
                name="validate_code",
                description="Validate a code snippet against the rules for a context.",
                inputSchema=VALIDATE_SCHEMA,
            ),
            types.Tool(
                name="search_similar",
                description="Find rules similar to a free-text query (vector backend only).",
                inputSchema=SEARCH_SCHEMA,
            ),
            types.Tool(
                name="get_guidelines",
                description=(
                    "Get code guidelines for a specific programming language and project type"
                ),
                inputSchema=GUIDELINES_SCHEMA,
            ),
        ]

    @server.call_tool()
    async def call_tool(
        name: str,
        arguments: dict | None,
    ) -> list[types.TextContent]:
        args = arguments or {}
        logger.debug("Handling tool %s with %s", name, args)

        if name == "codestyle":
            text = rules.codestyle(
                _required(args, "categories"),
                language=args.get("language"),
                keywords=args.get("keywords", ""),
            )
        elif name == "get_rules_by_category":
            text = _rules_json(rules.get_rules_by_category(_required(args, "category")))
        elif name == "get_rules_by_type":
            text = _rules_json(rules.get_rules_by_type(_required(args, "type")))
        elif name == "get_applicable_rules":
            text = _rules_json(rules.get_applicable_rules(_required(args, "context")))
        elif name == "get_template":
            text = rules.get_template(_required(args, "rule_name"))
        elif name == "get_examples":
            examples = rules.get_examples(_required(args, "rule_name"))
            text = json.dumps([ex.model_dump(mode="json") for ex in examples], indent=2)
        elif name == "validate_code":
            result = rules.validate_code(_required(args, "code"), _required(args, "context"))
            text = result.model_dump_json(indent=2)
        elif name == "search_similar":
            query = _required(args, "query")
            text = _rules_json(rules.search_similar(query, args.get("limit", 5)))
        elif name == "get_guidelines":
            request = GuidelineRequest(
                language=args.get("language", ""),
                project_type=args.get("project_type", ""),
                options=args.get("options") or {},
            )
            guidelines = services.guidelines.get_guidelines(request)
            text = format_guidelines_markdown(guidelines, language=request.language)
        else:
            raise NotFoundError(f"Unknown tool: {name}")

        return [types.TextContent(type="text", text=text)]

    return server


async def run_mcp_server(services: Services) -> None:
    """Run the MCP server with stdio transport."""
    server = create_mcp_server(services)
    logger.info("MCP server starting on stdio")
    async with stdio_server() as (read_stream, write_stream):
        init_options = server.create_initialization_options(
            notification_options=NotificationOptions(),
        )
        await server.run(read_stream, write_stream, init_options)


def main(services: Services) -> None:
    anyio.run(run_mcp_server, services)
