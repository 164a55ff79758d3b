from __future__ import annotations

import argparse
import dataclasses

from datashelf.cli.context import CLIContext
from datashelf.web.app import create_app


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("serve", help="Run the HTTP resource server")
    parser.add_argument("--host", default=None, help="Bind address (default: $DATASHELF_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="Listening port (default: $PORT or 3111)")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    try:
        import uvicorn
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("uvicorn is required for serve mode. Install project dependencies.") from exc

    settings = ctx.settings
    if args.host is not None:
        settings = dataclasses.replace(settings, host=args.host)
    if args.port is not None:
        settings = dataclasses.replace(settings, port=args.port)

    app = create_app(settings)
    scheme = "https" if settings.tls_enabled else "http"
    ctx.console.print(
        f"[green]Serving[/green] {settings.data_dir} on {scheme}://{settings.host}:{settings.port}"
    )
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        ssl_keyfile=str(settings.ssl_keyfile) if settings.ssl_keyfile else None,
        ssl_certfile=str(settings.ssl_certfile) if settings.ssl_certfile else None,
    )
    return 0
