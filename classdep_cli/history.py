"""Remember the last analysis file the user rendered from."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from . import config

logger = logging.getLogger(__name__)


class InputHistory:
    """Persist the previous analysis path in a small JSON state file."""

    def __init__(self, state_file: Optional[Path] = None):
        self.state_file = Path(state_file) if state_file else config.STATE_FILE

    def get_previous_input(self) -> Optional[str]:
        if not self.state_file.exists():
            return None
        try:
            payload = json.loads(self.state_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not read history file %s: %s", self.state_file, exc)
            return None
        if not isinstance(payload, dict):
            return None
        value = payload.get("previous_input")
        return value if isinstance(value, str) and value else None

    def set_previous_input(self, input_path: str) -> None:
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            self.state_file.write_text(
                json.dumps({"previous_input": str(input_path)}, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            logger.warning("Could not save history file %s: %s", self.state_file, exc)
