"""Safe page file writes."""

import os
from pathlib import Path
from typing import Optional

import structlog

from mdpaste.services.exceptions import FileModifiedError

logger = structlog.get_logger()


def atomic_write(path: Path, content: str, expected_mtime: Optional[float] = None) -> None:
    """
    Atomically write content to file with temp-file-rename pattern.

    1. Early modification check (before write)
    2. Write to temporary file and fsync it
    3. Late modification check (after write, before rename)
    4. Atomic rename to replace original file

    Args:
        path: Target file path
        content: Content to write
        expected_mtime: Modification time the file had when it was loaded.
            None means the file is new and must not have appeared meanwhile.

    Raises:
        FileModifiedError: If file was modified (or created) behind our back
        OSError: On file I/O errors
    """
    _check_unmodified(path, expected_mtime, "before write (early check)")

    # Same directory keeps the rename on one filesystem
    temp_path = path.parent / f".{path.name}.tmp.{os.getpid()}"

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        _check_unmodified(path, expected_mtime, "during write (late check)")

        temp_path.replace(path)

        logger.debug("atomic_write_success", path=str(path), size=len(content))

    except FileModifiedError:
        if temp_path.exists():
            temp_path.unlink()
        raise

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error("atomic_write_failed", path=str(path), error=str(e))
        raise


def _check_unmodified(path: Path, expected_mtime: Optional[float], when: str) -> None:
    if expected_mtime is None:
        if path.exists():
            raise FileModifiedError(str(path), f"File was created {when}")
        return

    if not path.exists() or path.stat().st_mtime != expected_mtime:
        raise FileModifiedError(str(path), f"File was modified {when}")
