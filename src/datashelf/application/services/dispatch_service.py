from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from datashelf.core.errors import InvalidIdentifierError, ResourceNotFoundError, StorageFailureError
from datashelf.core.time import http_date
from datashelf.domain.models.resource import ResourceMetadata
from datashelf.infrastructure.store.resource_store import ResourceStore

logger = logging.getLogger(__name__)

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"

MSG_CREATED = "File created successfully."
MSG_UPSERTED = "File created/updated successfully."
MSG_DELETED = "File deleted successfully."
MSG_NOT_FOUND = "File not found."
MSG_INVALID_ID = "Invalid resource identifier."
MSG_STORAGE_FAILURE = "Internal storage error."
MSG_METHOD_NOT_ALLOWED = "Method not allowed."


@dataclass(slots=True)
class DispatchResult:
    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


def _text(status_code: int, message: str) -> DispatchResult:
    body = message.encode("utf-8")
    return DispatchResult(
        status_code=status_code,
        body=body,
        headers={"Content-Type": TEXT_CONTENT_TYPE, "Content-Length": str(len(body))},
    )


def _metadata_headers(meta: ResourceMetadata) -> dict[str, str]:
    return {
        "Content-Type": meta.content_type,
        "Content-Length": str(meta.size_bytes),
        "Last-Modified": http_date(meta.last_modified),
    }


class DispatchService:
    """Turns a (method, resource id, body) triple into a response descriptor.

    Store errors never escape: missing resources map to 404, rejected
    identifiers to 400 and filesystem failures to 500. The request body is
    passed through untouched.
    """

    def __init__(self, store: ResourceStore) -> None:
        self.store = store
        self._handlers = {
            "GET": self.get,
            "HEAD": self.head,
            "POST": self.post,
            "PUT": self.put,
            "DELETE": self.delete,
        }

    def dispatch(self, method: str, resource_id: str | None, body: bytes = b"") -> DispatchResult:
        method = method.upper()
        handler = self._handlers.get(method)
        if handler is None:
            result = _text(405, MSG_METHOD_NOT_ALLOWED)
            result.headers["Allow"] = ", ".join(self._handlers)
            return result

        try:
            if method in {"POST", "PUT"}:
                return handler(resource_id or "", body)
            return handler(resource_id or None)
        except ResourceNotFoundError:
            return _text(404, MSG_NOT_FOUND)
        except InvalidIdentifierError as exc:
            logger.info("Rejected %s for identifier: %s", method, exc)
            return _text(400, MSG_INVALID_ID)
        except StorageFailureError:
            logger.exception("Storage failure during %s %r", method, resource_id)
            return _text(500, MSG_STORAGE_FAILURE)

    def get(self, resource_id: str | None) -> DispatchResult:
        if resource_id is None:
            return self._listing()
        resource = self.store.read(resource_id)
        return DispatchResult(
            status_code=200,
            body=resource.content,
            headers=_metadata_headers(resource.metadata),
        )

    def head(self, resource_id: str | None) -> DispatchResult:
        if resource_id is None:
            listing = self._listing()
            return DispatchResult(status_code=200, headers=listing.headers)
        meta = self.store.stat(resource_id)
        return DispatchResult(status_code=200, headers=_metadata_headers(meta))

    def post(self, resource_id: str, body: bytes) -> DispatchResult:
        self.store.create(resource_id, body)
        return _text(201, MSG_CREATED)

    def put(self, resource_id: str, body: bytes) -> DispatchResult:
        _, created = self.store.upsert(resource_id, body)
        logger.debug("PUT %s %s", resource_id, "created" if created else "replaced")
        return _text(200, MSG_UPSERTED)

    def delete(self, resource_id: str | None) -> DispatchResult:
        self.store.delete(resource_id or "")
        return _text(200, MSG_DELETED)

    def _listing(self) -> DispatchResult:
        body = json.dumps(self.store.list()).encode("utf-8")
        return DispatchResult(
            status_code=200,
            body=body,
            headers={"Content-Type": JSON_CONTENT_TYPE, "Content-Length": str(len(body))},
        )
