"""Command-line entry point for the application directory."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

import structlog

from config import settings
from packages.apm_tools.errors import DirectoryError

from . import commands
from .config import RuntimeConfig, bootstrap, build_runtime_config

logger = structlog.get_logger(__name__)

CommandHandler = Callable[[argparse.Namespace, RuntimeConfig], None]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apm-cli",
        description="Search and browse the application portfolio directory.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help="Logging level (CRITICAL, ERROR, WARNING, INFO, DEBUG). Default: INFO",
    )
    parser.add_argument(
        "--data-file",
        dest="data_file",
        help="Path to the applications JSON file (env: APM_DATA_FILE)",
    )
    parser.add_argument(
        "--mirror",
        dest="mirror_path",
        help="DuckDB file mirroring the dataset (env: APM_MIRROR_PATH)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=settings.LOG_FORMAT.lower() == "json",
        help="Emit log events as JSON lines (env: LOG_FORMAT=json)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    commands.register(subparsers)
    return parser


def configure_logging(level_name: str, *, json_output: bool = False) -> None:
    """Route structlog and stdlib logging to stderr.

    Events render as ``key=value`` pairs, or one JSON object per line when
    *json_output* is set.
    """

    level_value = getattr(logging, level_name.upper(), logging.INFO)
    timestamper = structlog.processors.TimeStamper(fmt="iso", key="timestamp")
    shared = [structlog.stdlib.add_log_level, structlog.stdlib.add_logger_name, timestamper]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_output
        else structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "logger", "event"], sort_keys=True
        )
    )
    formatter = structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(level_value)
    logging.basicConfig(level=level_value, handlers=[handler], force=True)


def main(argv: Optional[List[str]] = None) -> None:
    bootstrap()
    parser = build_parser()
    args = parser.parse_args(argv)

    level_name = str(getattr(args, "log_level", "INFO")).upper()
    configure_logging(level_name, json_output=bool(getattr(args, "log_json", False)))

    handler: CommandHandler = getattr(args, "handler", None)
    if not callable(handler):
        parser.error("Command handler missing")

    runtime = build_runtime_config(
        log_level=level_name,
        data_file=getattr(args, "data_file", None),
        mirror_path=getattr(args, "mirror_path", None),
    )

    logger.debug(
        "command.start",
        command=args.command,
        data_file=str(runtime.data_file),
        mirror=str(runtime.mirror_path) if runtime.mirror_path else None,
    )
    try:
        handler(args, runtime)
    except DirectoryError as exc:
        logger.debug("command.failed", command=args.command, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover
    main()
