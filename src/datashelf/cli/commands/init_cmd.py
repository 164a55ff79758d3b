from __future__ import annotations

import argparse

from datashelf.application.services.bootstrap_service import BootstrapService
from datashelf.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("init", help="Create the data directory and index document")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    result = BootstrapService(ctx.settings).init_store()

    if result.paths_created:
        for path in result.paths_created:
            ctx.console.print(f"[green]Created[/green] {path}")
    else:
        ctx.console.print("[yellow]Data directory already existed[/yellow]")

    if result.index_created:
        ctx.console.print(f"[green]Index installed[/green] {result.index_path}")
    else:
        ctx.console.print(f"[yellow]Index kept[/yellow] {result.index_path}")
    return 0
