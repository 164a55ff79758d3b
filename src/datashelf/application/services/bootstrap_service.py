from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from datashelf.core.config import Settings
from datashelf.core.errors import BootstrapError
from datashelf.core.files import ensure_directory, safe_copy_atomic

logger = logging.getLogger(__name__)

INDEX_RESOURCE_ID = "index.html"


@dataclass(slots=True)
class InitResult:
    paths_created: list[Path]
    index_path: Path
    index_created: bool


class BootstrapService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def index_path(self) -> Path:
        return self.settings.data_dir / INDEX_RESOURCE_ID

    def init_store(self) -> InitResult:
        data_dir = self.settings.data_dir
        paths_created: list[Path] = []

        if not data_dir.exists():
            paths_created.append(data_dir)
        try:
            ensure_directory(data_dir)
        except OSError as exc:
            raise BootstrapError(f"Unable to create data directory {data_dir}: {exc}") from exc

        index_created = False
        if not self.index_path.exists():
            template = self.settings.index_template
            if not template.is_file():
                raise BootstrapError(f"Index template not found: {template}")
            try:
                safe_copy_atomic(template, self.index_path)
            except OSError as exc:
                raise BootstrapError(f"Unable to install index document: {exc}") from exc
            index_created = True
            logger.info("Installed index document at %s", self.index_path)

        return InitResult(paths_created=paths_created, index_path=self.index_path, index_created=index_created)

    def is_initialized(self) -> bool:
        return self.settings.data_dir.is_dir()
