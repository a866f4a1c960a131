"""Run context: output directory, artifact writers, run log and event bus.

A ``RunContext`` is handed to every phase of a conversion instead of
module-level log or file handles. Entering it creates the output tree and
attaches a timestamped log file to the ``cascadewind`` logger; leaving it
detaches and closes that file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from cascadewind.events.bus import EventBus

_ROOT_LOGGER = "cascadewind"
_LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


@dataclass
class RunContext:
    output_dir: Path
    event_bus: EventBus = field(default_factory=EventBus)
    log_level: int = logging.DEBUG
    log_path: Path | None = field(default=None, init=False)
    _handler: logging.Handler | None = field(default=None, init=False, repr=False)
    _previous_level: int = field(default=logging.NOTSET, init=False, repr=False)

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)

    @property
    def json_dir(self) -> Path:
        return self.output_dir / "json"

    @property
    def logs_dir(self) -> Path:
        return self.output_dir / "logs"

    # --- lifecycle ------------------------------------------------------------

    def open(self) -> RunContext:
        self.json_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        self.log_path = self.logs_dir / f"converter-{ts}.log"
        handler = logging.FileHandler(self.log_path, encoding="utf-8")
        handler.setLevel(self.log_level)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root = logging.getLogger(_ROOT_LOGGER)
        root.addHandler(handler)
        self._previous_level = root.level
        if root.level == logging.NOTSET or root.level > self.log_level:
            root.setLevel(self.log_level)
        self._handler = handler
        root.info("Run log opened in %s", self.output_dir)
        return self

    def close(self) -> None:
        if self._handler is None:
            return
        root = logging.getLogger(_ROOT_LOGGER)
        root.removeHandler(self._handler)
        root.setLevel(self._previous_level)
        self._handler.close()
        self._handler = None

    def __enter__(self) -> RunContext:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- artifacts ------------------------------------------------------------

    def write_json(self, name: str, data: Any) -> Path:
        """Write a JSON artifact under ``json/``."""
        path = self.json_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
        return path

    def write_text(self, name: str, content: str) -> Path:
        """Write a text artifact relative to the output directory."""
        path = self.output_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
