from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any


def load_document(
    path: Path,
    *,
    retries: int = 3,
    retry_delay: float = 0.02,
    logger: logging.Logger,
) -> dict[str, Any] | None:
    """Load a JSON object with retries for transient partial writes.

    Returns `{}` when the file does not exist.
    Returns None when the file does not hold an object or loading fails
    after retries; callers must not overwrite such a file blindly.
    """

    if not path.exists():
        return {}

    last_error: Exception | None = None
    for _ in range(max(1, retries)):
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                logger.warning("Failed to load %s: top-level JSON is not an object", path)
                return None
            return loaded
        except json.JSONDecodeError as e:
            last_error = e
            time.sleep(retry_delay)
        except OSError as e:
            last_error = e
            break

    logger.warning("Failed to load %s: %s", path, last_error)
    return None


def save_document_atomic(path: Path, document: dict[str, Any], *, logger: logging.Logger) -> bool:
    """Save JSON atomically (write temp file then replace).

    Returns True on success.
    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        tmp_fd, tmp_path = tempfile.mkstemp(prefix=path.stem + ".", suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        finally:
            try:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
            except OSError as exc:
                logger.debug("Failed to remove temp file %s: %s", tmp_path, exc)

    except (OSError, TypeError, ValueError) as e:
        logger.warning("Failed to save %s: %s", path, e)
        return False

    return True
