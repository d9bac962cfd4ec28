"""Docker secret support for credentials passed as ``<NAME>_FILE``."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Only these settings may be sourced from secret files
SECRET_VARIABLES = (
    "HUE_APP_KEY",
    "HIVE_ACCESS_TOKEN",
    "SPOTIFY_ACCESS_TOKEN",
    "STORAGE_MONGO_URI",
)


def load_secret_file_variables() -> None:
    """
    Expose the content of ``<NAME>_FILE`` as ``<NAME>`` for known secrets.

    An explicitly set ``<NAME>`` always wins. Unreadable files are logged
    and skipped so a missing secret surfaces later as "not connected".
    """
    for name in SECRET_VARIABLES:
        if os.environ.get(name):
            continue
        file_path = os.environ.get(f"{name}_FILE")
        if not file_path:
            continue
        try:
            os.environ[name] = Path(file_path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": name, "path": file_path, "error": str(exc)},
            )


load_secret_file_variables()
