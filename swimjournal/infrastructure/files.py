"""
Atomic file writes.

Artifacts are written to a temp file in the destination directory and then
renamed over the final path, so readers never see a zero-byte or
truncated file. Errors from the file system propagate unchanged.
"""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_directory(directory: Path) -> Path:
    """Create ``directory`` (and parents) if needed. Safe to call repeatedly."""
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def atomic_write_bytes(path: Path, data: bytes) -> Path:
    """Write ``data`` to ``path`` all-or-nothing and return the absolute path."""
    path = Path(path).absolute()

    fd, tmp_name = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "wb") as tmp_file:
            tmp_file.write(data)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug(
        "Wrote file",
        extra={"path": str(path), "size_bytes": len(data)}
    )

    return path


def atomic_write_text(path: Path, text: str) -> Path:
    """Write UTF-8 text (no BOM) atomically."""
    return atomic_write_bytes(path, text.encode("utf-8"))
