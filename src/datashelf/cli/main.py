from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console

from datashelf.cli.commands import init_cmd, resources_cmd, serve_cmd
from datashelf.cli.context import CLIContext
from datashelf.core.config import load_settings
from datashelf.core.errors import DatashelfError
from datashelf.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="datashelf",
        description="Datashelf file-backed resource server",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Directory the default data directory lives in (default: current working directory)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Store root (default: $DATASHELF_DATA_DIR or <project-root>/data)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command", required=True)
    init_cmd.register(subparsers)
    resources_cmd.register(subparsers)
    serve_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        settings = load_settings(args.project_root, data_dir=args.data_dir)
        ctx = CLIContext(settings=settings, console=console)
        return handler(args, ctx)
    except DatashelfError as exc:
        logger.error(str(exc))
        return 1
