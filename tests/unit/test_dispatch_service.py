from __future__ import annotations

import json
from pathlib import Path

from datashelf.application.services.dispatch_service import DispatchService
from datashelf.core.errors import StorageFailureError
from datashelf.infrastructure.store.resource_store import ResourceStore


def _dispatcher(tmp_path: Path) -> DispatchService:
    store = ResourceStore(tmp_path / "data")
    store.ensure_layout()
    return DispatchService(store)


def test_post_creates_with_201(tmp_path: Path) -> None:
    dispatcher = _dispatcher(tmp_path)
    result = dispatcher.dispatch("POST", "hello.txt", b"hi")
    assert result.status_code == 201
    assert result.body == b"File created successfully."
    assert result.headers["Content-Type"].startswith("text/plain")


def test_post_over_existing_resource_still_succeeds(tmp_path: Path) -> None:
    dispatcher = _dispatcher(tmp_path)
    dispatcher.dispatch("POST", "hello.txt", b"one")
    result = dispatcher.dispatch("POST", "hello.txt", b"two")
    assert result.status_code == 201
    assert dispatcher.dispatch("GET", "hello.txt").body == b"two"


def test_put_upserts_with_200(tmp_path: Path) -> None:
    dispatcher = _dispatcher(tmp_path)
    first = dispatcher.dispatch("PUT", "doc.md", b"# one")
    second = dispatcher.dispatch("PUT", "doc.md", b"# two")
    assert first.status_code == second.status_code == 200
    assert first.body == b"File created/updated successfully."

    got = dispatcher.dispatch("GET", "doc.md")
    assert got.status_code == 200
    assert got.body == b"# two"
    assert got.headers["Content-Type"] == "text/markdown"
    assert got.headers["Content-Length"] == "5"
    assert got.headers["Last-Modified"].endswith("GMT")


def test_head_returns_headers_only(tmp_path: Path) -> None:
    dispatcher = _dispatcher(tmp_path)
    dispatcher.dispatch("PUT", "pic.png", b"\x89PNG....")
    result = dispatcher.dispatch("HEAD", "pic.png")
    assert result.status_code == 200
    assert result.body == b""
    assert result.headers["Content-Type"] == "image/png"
    assert result.headers["Content-Length"] == "8"

    assert dispatcher.dispatch("HEAD", "missing.png").status_code == 404


def test_get_without_id_lists_resources_as_json(tmp_path: Path) -> None:
    dispatcher = _dispatcher(tmp_path)
    for name in ("a", "b", "c"):
        dispatcher.dispatch("PUT", name, name.encode())
    dispatcher.dispatch("DELETE", "b")

    for resource_id in (None, ""):
        result = dispatcher.dispatch("GET", resource_id)
        assert result.status_code == 200
        assert result.headers["Content-Type"] == "application/json"
        assert set(json.loads(result.body)) == {"a", "c"}


def test_missing_resource_is_404(tmp_path: Path) -> None:
    dispatcher = _dispatcher(tmp_path)
    result = dispatcher.dispatch("GET", "missing.txt")
    assert result.status_code == 404
    assert result.body == b"File not found."


def test_delete_then_delete_again(tmp_path: Path) -> None:
    dispatcher = _dispatcher(tmp_path)
    dispatcher.dispatch("PUT", "x.txt", b"x")
    first = dispatcher.dispatch("DELETE", "x.txt")
    second = dispatcher.dispatch("DELETE", "x.txt")
    assert first.status_code == 200
    assert first.body == b"File deleted successfully."
    assert second.status_code == 404


def test_invalid_identifier_is_400_for_every_method(tmp_path: Path) -> None:
    dispatcher = _dispatcher(tmp_path)
    for method in ("GET", "HEAD", "POST", "PUT", "DELETE"):
        result = dispatcher.dispatch(method, "../../etc/passwd", b"root")
        assert result.status_code == 400, method
        assert result.body == b"Invalid resource identifier."
    assert dispatcher.dispatch("PUT", "", b"x").status_code == 400
    assert dispatcher.dispatch("DELETE", "").status_code == 400


def test_storage_failure_is_500_without_leaking_cause(tmp_path: Path, monkeypatch) -> None:
    dispatcher = _dispatcher(tmp_path)

    def broken_upsert(resource_id: str, content: bytes):
        raise StorageFailureError("Permission denied: /very/secret/path")

    monkeypatch.setattr(dispatcher.store, "upsert", broken_upsert)
    result = dispatcher.dispatch("PUT", "x.txt", b"x")
    assert result.status_code == 500
    assert result.body == b"Internal storage error."
    assert b"secret" not in result.body


def test_unsupported_method_is_405(tmp_path: Path) -> None:
    result = _dispatcher(tmp_path).dispatch("PATCH", "x.txt", b"x")
    assert result.status_code == 405
    assert "PUT" in result.headers["Allow"]
