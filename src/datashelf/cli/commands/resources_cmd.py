from __future__ import annotations

import argparse

from rich.table import Table

from datashelf.application.services.bootstrap_service import BootstrapService
from datashelf.cli.context import CLIContext
from datashelf.core.errors import BootstrapError, ResourceNotFoundError
from datashelf.core.time import timestamp_to_utc_iso
from datashelf.infrastructure.store.resource_store import ResourceStore


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("ls", help="List stored resources")
    parser.add_argument("--limit", type=int, default=50)
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    if not BootstrapService(ctx.settings).is_initialized():
        raise BootstrapError(
            f"Data directory is missing. Run 'datashelf init' first for {ctx.settings.data_dir}"
        )

    store = ResourceStore(ctx.settings.data_dir)
    names = sorted(store.list())[: args.limit]

    table = Table(title=f"Resources ({len(names)})")
    table.add_column("ID")
    table.add_column("Content Type")
    table.add_column("Size", justify="right")
    table.add_column("Last Modified (UTC)")

    for name in names:
        try:
            meta = store.stat(name)
        except ResourceNotFoundError:
            # Deleted between listing and stat.
            continue
        table.add_row(meta.id, meta.content_type, str(meta.size_bytes), timestamp_to_utc_iso(meta.last_modified))

    ctx.console.print(table)
    return 0
