from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ResourceMetadata:
    id: str
    content_type: str
    size_bytes: int
    last_modified: float


@dataclass(slots=True)
class Resource:
    id: str
    content: bytes
    content_type: str
    size_bytes: int
    last_modified: float

    @property
    def metadata(self) -> ResourceMetadata:
        return ResourceMetadata(
            id=self.id,
            content_type=self.content_type,
            size_bytes=self.size_bytes,
            last_modified=self.last_modified,
        )
