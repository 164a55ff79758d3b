from __future__ import annotations

import logging
import os
from pathlib import Path, PureWindowsPath

from datashelf.core.errors import InvalidIdentifierError, ResourceNotFoundError, StorageFailureError
from datashelf.core.files import TEMP_PREFIX, ensure_directory, write_bytes_atomic
from datashelf.core.media_types import resolve_content_type
from datashelf.domain.models.resource import Resource, ResourceMetadata
from datashelf.infrastructure.store.locks import KeyedLock

logger = logging.getLogger(__name__)

MAX_ID_BYTES = 255
_FORBIDDEN_CHARS = ("/", "\\", "\x00")


class ResourceStore:
    """Flat, file-per-resource store rooted at ``base_dir``.

    Every operation validates the identifier before touching the disk and
    holds that identifier's lock for its whole span. Writes go through a
    temporary file and ``os.replace``, so a reader observes either the
    previous content or the new content, never a mix.
    """

    def __init__(self, base_dir: Path, locks: KeyedLock | None = None) -> None:
        self.base_dir = base_dir.expanduser().resolve()
        self.locks = locks or KeyedLock()

    def ensure_layout(self) -> None:
        ensure_directory(self.base_dir)

    def resolve(self, resource_id: str) -> Path:
        if not isinstance(resource_id, str) or resource_id in {"", ".", ".."}:
            raise InvalidIdentifierError(f"Invalid resource identifier: {resource_id!r}")
        if any(ch in resource_id for ch in _FORBIDDEN_CHARS):
            raise InvalidIdentifierError(f"Resource identifier contains a path separator: {resource_id!r}")
        if PureWindowsPath(resource_id).drive:
            raise InvalidIdentifierError(f"Resource identifier carries a drive: {resource_id!r}")
        if resource_id.startswith(TEMP_PREFIX):
            raise InvalidIdentifierError(f"Resource identifier uses a reserved prefix: {resource_id!r}")
        if len(resource_id.encode("utf-8", "surrogateescape")) > MAX_ID_BYTES:
            raise InvalidIdentifierError("Resource identifier is too long.")

        candidate = self.base_dir / resource_id
        # A symlink may point outside the root or alias another resource.
        resolved = candidate.resolve()
        if resolved.parent != self.base_dir or resolved != candidate:
            raise InvalidIdentifierError(f"Resource identifier escapes the store root: {resource_id!r}")
        return candidate

    def create(self, resource_id: str, content: bytes) -> Resource:
        resource, _ = self.upsert(resource_id, content)
        return resource

    def upsert(self, resource_id: str, content: bytes) -> tuple[Resource, bool]:
        path = self.resolve(resource_id)
        with self.locks.hold(resource_id):
            created = not path.is_file()
            self._write(resource_id, path, content)
            return self._load(resource_id, path, content), created

    def update(self, resource_id: str, content: bytes) -> Resource:
        path = self.resolve(resource_id)
        with self.locks.hold(resource_id):
            if not path.is_file():
                raise ResourceNotFoundError(f"Resource not found: {resource_id}")
            self._write(resource_id, path, content)
            return self._load(resource_id, path, content)

    def read(self, resource_id: str) -> Resource:
        path = self.resolve(resource_id)
        with self.locks.hold(resource_id):
            if not path.is_file():
                raise ResourceNotFoundError(f"Resource not found: {resource_id}")
            try:
                content = path.read_bytes()
            except FileNotFoundError as exc:
                raise ResourceNotFoundError(f"Resource not found: {resource_id}") from exc
            except OSError as exc:
                raise StorageFailureError(f"Unable to read resource {resource_id}: {exc}") from exc
            return self._load(resource_id, path, content)

    def stat(self, resource_id: str) -> ResourceMetadata:
        path = self.resolve(resource_id)
        with self.locks.hold(resource_id):
            return self._stat(resource_id, path)

    def delete(self, resource_id: str) -> None:
        path = self.resolve(resource_id)
        with self.locks.hold(resource_id):
            if not path.is_file():
                raise ResourceNotFoundError(f"Resource not found: {resource_id}")
            try:
                path.unlink()
            except FileNotFoundError as exc:
                raise ResourceNotFoundError(f"Resource not found: {resource_id}") from exc
            except OSError as exc:
                raise StorageFailureError(f"Unable to delete resource {resource_id}: {exc}") from exc
        logger.debug("Deleted resource %s", resource_id)

    def list(self) -> list[str]:
        try:
            with os.scandir(self.base_dir) as entries:
                return [
                    entry.name
                    for entry in entries
                    if not entry.name.startswith(TEMP_PREFIX) and entry.is_file(follow_symlinks=False)
                ]
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageFailureError(f"Unable to list resources: {exc}") from exc

    def _write(self, resource_id: str, path: Path, content: bytes) -> None:
        try:
            write_bytes_atomic(path, content)
        except OSError as exc:
            raise StorageFailureError(f"Unable to write resource {resource_id}: {exc}") from exc
        logger.debug("Wrote resource %s (%d bytes)", resource_id, len(content))

    def _stat(self, resource_id: str, path: Path) -> ResourceMetadata:
        try:
            st = path.stat()
        except FileNotFoundError as exc:
            raise ResourceNotFoundError(f"Resource not found: {resource_id}") from exc
        except OSError as exc:
            raise StorageFailureError(f"Unable to stat resource {resource_id}: {exc}") from exc
        if not path.is_file():
            raise ResourceNotFoundError(f"Resource not found: {resource_id}")
        return ResourceMetadata(
            id=resource_id,
            content_type=resolve_content_type(resource_id),
            size_bytes=st.st_size,
            last_modified=st.st_mtime,
        )

    def _load(self, resource_id: str, path: Path, content: bytes) -> Resource:
        meta = self._stat(resource_id, path)
        return Resource(
            id=resource_id,
            content=content,
            content_type=meta.content_type,
            size_bytes=meta.size_bytes,
            last_modified=meta.last_modified,
        )
