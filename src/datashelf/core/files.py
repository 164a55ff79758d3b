from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

TEMP_PREFIX = ".tmp-"


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def safe_copy_atomic(src: Path, dst: Path) -> None:
    ensure_directory(dst.parent)
    temp_path = dst.parent / f"{TEMP_PREFIX}{dst.name}"
    shutil.copy2(src, temp_path)
    os.replace(temp_path, dst)


def write_bytes_atomic(dst: Path, data: bytes, mode: int = 0o644) -> None:
    """Write ``data`` to ``dst`` so readers see either the old or the new file."""
    ensure_directory(dst.parent)
    fd, temp_name = tempfile.mkstemp(dir=dst.parent, prefix=TEMP_PREFIX, suffix=".tmp")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        temp_path.chmod(mode)
        os.replace(temp_path, dst)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
