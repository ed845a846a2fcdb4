"""Open rendered diagrams in an external viewer."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

from .config import DEFAULT_VIEWER_COMMAND

logger = logging.getLogger(__name__)


def open_in_viewer(file_path: Path, command: str = DEFAULT_VIEWER_COMMAND) -> bool:
    """Launch ``command <file>`` without waiting for it. Returns ``False`` on failure."""
    full_path = Path(file_path).resolve()
    if not full_path.is_file():
        logger.warning("Diagram file does not exist: %s", full_path)
        return False

    argv = shlex.split(command)
    if not argv or shutil.which(argv[0]) is None:
        logger.warning("Viewer command '%s' is not available", command)
        return False

    try:
        subprocess.Popen(
            [*argv, str(full_path)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        logger.warning("Failed to launch viewer '%s': %s", command, exc)
        return False
    return True
