"""Entry point for the Push Chain MCP server."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from mcp.shared.exceptions import McpError

from pushchain_mcp.errors import DataIntegrityError
from pushchain_mcp_server.config import DOCS_SOURCES, ServerConfig
from pushchain_mcp_server.fastmcp_adapter import ERROR_STYLES, build_fastmcp_app
from pushchain_mcp_server.logging_config import configure_logging
from pushchain_mcp_server.runtime import Runtime, build_runtime

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the server CLI."""
    parser = argparse.ArgumentParser(
        description="Serve Push Chain documentation and SDK data over MCP."
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse", "streamable-http"],
        default="stdio",
        help="Transport used to serve the MCP protocol.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host for HTTP transports.")
    parser.add_argument("--port", type=int, default=8000, help="Port for HTTP transports.")
    parser.add_argument("--path", default=None, help="URL path for HTTP transports.")
    parser.add_argument(
        "--data-dir", type=Path, default=None, help="Directory holding the JSON data files."
    )
    parser.add_argument(
        "--docs-cache", type=Path, default=None, help="Documentation cache file."
    )
    parser.add_argument(
        "--docs-source",
        choices=DOCS_SOURCES,
        default=None,
        help="Serve documentation from the local cache or live from GitHub.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level for stderr output.")
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print the available tool catalog as JSON and exit.",
    )
    parser.add_argument(
        "--call", metavar="TOOL", default=None, help="Run a single tool call and exit."
    )
    parser.add_argument(
        "--arguments",
        default="{}",
        help="JSON object of arguments for --call.",
    )
    parser.add_argument(
        "--error-style",
        choices=ERROR_STYLES,
        default="envelope",
        help=(
            "Report invalid arguments and unknown tools as an error envelope "
            "or as a JSON-RPC error, for --call and the served transports."
        ),
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> ServerConfig:
    config = ServerConfig.from_env()
    if args.data_dir is not None:
        config.data_dir = args.data_dir
    if args.docs_cache is not None:
        config.docs_cache_file = args.docs_cache
    if args.docs_source is not None:
        config.docs_source = args.docs_source
    if args.log_level is not None:
        config.log_level = args.log_level.upper()
    return config


def _run_call(runtime: Runtime, args: argparse.Namespace) -> int:
    try:
        arguments: Any = json.loads(args.arguments)
    except json.JSONDecodeError as exc:
        print(f"--arguments is not valid JSON: {exc}", file=sys.stderr)
        return 2
    result = runtime.server.call_tool(args.call, arguments)
    if args.error_style == "protocol":
        try:
            envelope = result.to_protocol_result()
        except McpError as exc:
            print(json.dumps({"error": exc.error.model_dump(exclude_none=True)}))
            return 1
        print(json.dumps(envelope))
    else:
        print(result.to_json())
    return 1 if result.is_error else 0


def main(argv: list[str] | None = None) -> int:
    """Load data and serve the tool set, or run one-shot CLI actions."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = _config_from_args(args)
        configure_logging(config.log_level)
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    try:
        runtime = build_runtime(config)
    except DataIntegrityError as error:
        logger.error("Refusing to start: %s", error.message)
        return 1

    try:
        if args.catalog:
            print(json.dumps(runtime.server.to_catalog(), indent=2))
            return 0
        if args.call:
            return _run_call(runtime, args)

        app, _ = build_fastmcp_app(runtime, error_style=args.error_style)
        run_kwargs: dict[str, Any] = {}
        if args.transport != "stdio":
            run_kwargs = {"host": args.host, "port": args.port}
            if args.path:
                run_kwargs["path"] = args.path
        logger.info("Serving %d tools over %s", len(runtime.tools), args.transport)
        app.run(transport=args.transport, **run_kwargs)
        return 0
    finally:
        runtime.close()


if __name__ == "__main__":
    raise SystemExit(main())
