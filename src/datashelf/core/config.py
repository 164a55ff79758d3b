from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from datashelf.core.errors import ConfigurationError

APP_NAME = "Datashelf"
APP_VERSION = "0.1.0"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3111
DEFAULT_DATA_DIRNAME = "data"
DEFAULT_ROUTE_PREFIX = "/data"
DEFAULT_INDEX_TEMPLATE = Path(__file__).resolve().parents[1] / "web" / "static" / "index.html"


@dataclass(frozen=True)
class Settings:
    project_root: Path
    data_dir: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    route_prefix: str = DEFAULT_ROUTE_PREFIX
    index_template: Path = DEFAULT_INDEX_TEMPLATE
    ssl_keyfile: Path | None = None
    ssl_certfile: Path | None = None

    @property
    def tls_enabled(self) -> bool:
        return self.ssl_keyfile is not None and self.ssl_certfile is not None


def normalize_route_prefix(raw: str) -> str:
    prefix = raw.strip().strip("/")
    return f"/{prefix}" if prefix else ""


def _read_port(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"PORT must be an integer, got {raw!r}") from exc
    if not 1 <= port <= 65535:
        raise ConfigurationError(f"PORT must be between 1 and 65535, got {port}")
    return port


def _read_path_env(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return Path(raw).expanduser().resolve()


def _check_tls(keyfile: Path | None, certfile: Path | None) -> None:
    if (keyfile is None) != (certfile is None):
        raise ConfigurationError("TLS needs both a private key and a certificate chain file.")
    for path in (keyfile, certfile):
        if path is not None and not path.is_file():
            raise ConfigurationError(f"TLS credential file not found: {path}")


def load_settings(
    project_root: Path | None = None,
    *,
    data_dir: Path | None = None,
    host: str | None = None,
    port: int | None = None,
) -> Settings:
    root = (project_root or Path.cwd()).expanduser().resolve()

    if data_dir is not None:
        resolved_data_dir = data_dir.expanduser().resolve()
    else:
        resolved_data_dir = _read_path_env("DATASHELF_DATA_DIR") or root / DEFAULT_DATA_DIRNAME

    ssl_keyfile = _read_path_env("DATASHELF_SSL_KEYFILE")
    ssl_certfile = _read_path_env("DATASHELF_SSL_CERTFILE")
    _check_tls(ssl_keyfile, ssl_certfile)

    return Settings(
        project_root=root,
        data_dir=resolved_data_dir,
        host=host or os.getenv("DATASHELF_HOST") or DEFAULT_HOST,
        port=port if port is not None else _read_port(os.getenv("PORT")),
        route_prefix=normalize_route_prefix(os.getenv("DATASHELF_ROUTE_PREFIX", DEFAULT_ROUTE_PREFIX)),
        ssl_keyfile=ssl_keyfile,
        ssl_certfile=ssl_certfile,
    )
