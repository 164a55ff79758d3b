from __future__ import annotations

from pathlib import PurePosixPath

DEFAULT_CONTENT_TYPE = "text/html"

CONTENT_TYPES: dict[str, str] = {
    # text
    ".txt": "text/plain",
    ".html": "text/html",
    ".htm": "text/html",
    ".json": "application/json",
    ".css": "text/css",
    ".js": "application/javascript",
    # image
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
    # audio
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".m4a": "audio/mp4",
    ".flac": "audio/flac",
    # video
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".ogv": "video/ogg",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    # linked data and notes
    ".ttl": "text/turtle",
    ".jsonld": "application/ld+json",
    ".md": "text/markdown",
    ".mindmap": "application/json",
}


def resolve_content_type(name: str) -> str:
    """Map a resource name to its MIME type by lower-cased extension.

    Names without a known extension fall back to ``text/html``; the stored
    bytes are never sniffed.
    """
    suffix = PurePosixPath(name).suffix.lower()
    return CONTENT_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)
