"""CLI entry point for codeguide."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import cast

from codeguide import __version__
from codeguide.bootstrap import Services, build_services
from codeguide.config import CodeguideConfig, load_config
from codeguide.core.errors import GuidelineError
from codeguide.logs import init_logging


def _load(args: argparse.Namespace) -> CodeguideConfig:
    config = load_config(cast(Path | None, args.config))
    if args.log_level:
        config.logging.level = args.log_level
    if args.log_file:
        config.logging.file = args.log_file
    if args.log_text:
        config.logging.text = True
    init_logging(
        config.logging.level,
        config.logging.file,
        text_format=config.logging.text,
        version=__version__,
    )
    return config


def _services(args: argparse.Namespace) -> Services:
    return build_services(_load(args))


def _cmd_mcp_serve(args: argparse.Namespace) -> None:
    from codeguide.mcp_server.server import main as mcp_main

    mcp_main(_services(args))


def _cmd_rpc_serve(args: argparse.Namespace) -> None:
    from codeguide.rpc.server import JsonLineServer

    JsonLineServer(_services(args).guidelines).run()


def _cmd_serve(args: argparse.Namespace) -> None:
    from codeguide.server.runner import run_server

    config = _load(args)
    if args.port is not None:
        config.server.port = args.port
    run_server(config)


def _cmd_rules(args: argparse.Namespace) -> None:
    text = _services(args).rules.codestyle(
        args.categories,
        language=args.language,
        keywords=args.keywords,
        markdown=args.markdown,
    )
    if text:
        print(text)
    else:
        print("No matching rules.", file=sys.stderr)


def _cmd_validate(args: argparse.Namespace) -> None:
    source = cast(Path, args.file)
    if not source.exists():
        print(f"Error: file not found: {source}", file=sys.stderr)
        sys.exit(1)

    result = _services(args).rules.validate_code(
        source.read_text(encoding="utf-8"), args.context
    )
    for message in result.messages:
        print(f"- {message}")
    if not result.valid:
        print(f"{source}: invalid", file=sys.stderr)
        sys.exit(1)
    print(f"{source}: ok")


def _cmd_search(args: argparse.Namespace) -> None:
    rules = _services(args).rules.search_similar(args.query, args.limit)
    if not rules:
        print("No similar rules found.")
        return
    for i, rule in enumerate(rules, 1):
        print(f"{i}. [{rule.category}] {rule.name}: {rule.description}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="codeguide",
        description="Serve code-style rules and guidelines to LLM assistants",
    )
    _ = parser.add_argument(
        "-V", "--version", action="version", version=f"codeguide {__version__}"
    )
    _ = parser.add_argument(
        "--config", type=Path, default=None, help="Path to a YAML or JSON config file"
    )
    _ = parser.add_argument(
        "--log-level", default=None, dest="log_level", help="debug, info, warn or error"
    )
    _ = parser.add_argument(
        "--log-file", default=None, dest="log_file", help="Write logs to this file"
    )
    _ = parser.add_argument(
        "--log-text", action="store_true", dest="log_text", help="Plain-text logs instead of JSON"
    )
    subparsers = parser.add_subparsers(dest="command")

    _ = subparsers.add_parser("mcp-serve", help="Start the MCP stdio server")
    _ = subparsers.add_parser("rpc-serve", help="Start the line-delimited JSON server on stdio")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API server")
    _ = serve_parser.add_argument("--port", type=int, default=None, help="Override the port")

    rules_parser = subparsers.add_parser("rules", help="Print formatted rules")
    _ = rules_parser.add_argument(
        "--categories", default="", help="Comma-separated categories (default: all)"
    )
    _ = rules_parser.add_argument("--keywords", default="", help="Comma-separated keywords")
    _ = rules_parser.add_argument("--language", default=None, help="Programming language")
    _ = rules_parser.add_argument(
        "--markdown", action="store_true", help="Render a Markdown document instead of LLM text"
    )

    validate_parser = subparsers.add_parser("validate", help="Validate a source file")
    _ = validate_parser.add_argument("file", type=Path, help="File to validate")
    _ = validate_parser.add_argument(
        "--context", required=True, help="Context whose rules apply (e.g. function)"
    )

    search_parser = subparsers.add_parser("search", help="Find rules similar to a query")
    _ = search_parser.add_argument("query", help="Free-text query")
    _ = search_parser.add_argument("--limit", type=int, default=5, help="Max results")

    args = parser.parse_args()
    dispatch = {
        "mcp-serve": _cmd_mcp_serve,
        "rpc-serve": _cmd_rpc_serve,
        "serve": _cmd_serve,
        "rules": _cmd_rules,
        "validate": _cmd_validate,
        "search": _cmd_search,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if not handler:
        parser.print_help()
        sys.exit(1)

    try:
        handler(args)
    except GuidelineError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
