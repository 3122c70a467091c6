"""FastMCP server entrypoint.

Loads configuration once, reports invalid settings and exits with
`CONFIG_ERROR_EXIT_CODE`, then registers tools and serves over stdio.
Tool implementations live in `tools` so they can be unit-tested
without the runtime.

Note: We import FastMCP lazily so `--check` and the config layer work
without the MCP runtime installed.
"""

from __future__ import annotations

import argparse
import json
import signal
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

import structlog

from .config import AppConfig, load_config
from .config.env import DEFAULT_ENV_FILE
from .errors import ConfigValidationError, to_error_payload
from .schemas import ServerStatusOutput
from .tools import available_services, server_status
from .utils.logging import configure_logging

# sysexits.h EX_CONFIG
CONFIG_ERROR_EXIT_CODE = 78

logger = structlog.get_logger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="combined-mcp-server",
        description="MCP server combining Google Custom Search and Wikipedia lookups.",
    )
    parser.add_argument(
        "--env-file",
        default=DEFAULT_ENV_FILE,
        help="KEY=VALUE file loaded before the live environment (default: %(default)s)",
    )
    parser.add_argument(
        "--no-env-file",
        action="store_true",
        help="ignore any env file and read only the live environment",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="validate the configuration, print it as JSON and exit",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="emit newline-delimited JSON logs on stderr",
    )
    return parser


def _create_app(name: str):
    try:
        from fastmcp import FastMCP
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "fastmcp is not installed. Install with 'pip install combined-mcp-server[mcp]'"
        ) from exc
    return FastMCP(name)


def _register_fastmcp_tools(app, config: AppConfig) -> None:
    # Namespace: server.*

    @app.tool("server.status")
    def server_status_tool() -> ServerStatusOutput:
        return server_status(config)


def _interrupt(signum, frame) -> None:
    raise KeyboardInterrupt


@contextmanager
def _sigterm_as_interrupt() -> Iterator[None]:
    """Route SIGTERM through the same clean shutdown path as Ctrl-C."""
    previous = signal.signal(signal.SIGTERM, _interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


def _log_startup(config: AppConfig) -> None:
    wiki = config.wikipedia
    logger.info(
        "server.startup",
        name=config.server.name,
        version=config.server.version,
        default_language=wiki.default_language,
        cache_max=wiki.cache.max,
        cache_ttl_ms=wiki.cache.ttl,
        deduplication="enabled" if wiki.enable_deduplication else "disabled",
    )
    if not config.google.enabled:
        logger.warning(
            "google_search.unavailable",
            reason="GOOGLE_API_KEY and GOOGLE_CSE_ID are both required",
        )


def main(argv: Optional[list[str]] = None) -> int:
    """Run the FastMCP application.

    Returns the process exit status: 0 after a clean shutdown or a
    successful ``--check``, `CONFIG_ERROR_EXIT_CODE` when the
    configuration is invalid. With ``--check`` the failure is also printed
    to stdout as a JSON error payload.
    """

    args = _build_arg_parser().parse_args(argv if argv is not None else sys.argv[1:])
    env_file = None if args.no_env_file else args.env_file

    try:
        config = load_config(env_file=env_file)
    except ConfigValidationError as exc:
        print("Configuration validation error:", file=sys.stderr)
        print(exc.report(), file=sys.stderr)
        if args.check:
            path_hint = str(env_file) if env_file is not None else None
            print(json.dumps(to_error_payload(exc, path_hint=path_hint), indent=2))
        return CONFIG_ERROR_EXIT_CODE

    if args.check:
        print(json.dumps(config.to_dict(redact_secrets=True), indent=2))
        return 0

    configure_logging(config.log_level, json_logs=args.json_logs)
    _log_startup(config)

    app = _create_app(config.server.name)
    _register_fastmcp_tools(app, config)
    logger.info("server.ready", transport="stdio", services=available_services(config))

    try:
        # Serves until SIGINT or SIGTERM
        with _sigterm_as_interrupt():
            app.run()
    except KeyboardInterrupt:
        pass
    logger.info("server.shutdown")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
