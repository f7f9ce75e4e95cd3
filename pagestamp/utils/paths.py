"""Path utilities for input validation and atomic output."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, creating if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def validate_input_file(path: Path, *, suffixes: tuple[str, ...] = ()) -> Path:
    """Resolve ``path`` and ensure it names an existing regular file.

    Raises:
        FileNotFoundError: If the path does not exist or is not a file
        ValueError: If ``suffixes`` is given and the suffix does not match
    """
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        raise FileNotFoundError(f"Not a file: {resolved}")
    if suffixes and resolved.suffix.lower() not in suffixes:
        raise ValueError(f"Unsupported file type {resolved.suffix!r} for {resolved}")
    return resolved


def publish_atomically(source: Path, destination: Path) -> Path:
    """Copy ``source`` to ``destination`` via a sibling temp file and ``os.replace``.

    The destination is either left untouched or fully replaced; a partial
    copy never becomes visible under the final name.
    """
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    fd: int | None = None
    tmp_path: str | None = None

    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(destination.parent),
            prefix=destination.name,
            suffix=".tmp",
        )
        with os.fdopen(fd, "wb") as handle:
            fd = None  # Ownership transferred to file object
            with Path(source).open("rb") as src:
                shutil.copyfileobj(src, handle)
            handle.flush()
            os.fsync(handle.fileno())

        os.replace(tmp_path, destination)
        tmp_path = None
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass

    return destination
