# weathercal/layout_cache.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from weathercal.models import LayoutDecision

log = logging.getLogger(__name__)

CACHE_FILE_PREFIX = "weather-cal-llm-cache-"
DEFAULT_MAX_AGE_MINUTES = 30


@dataclass
class CachedLayout:
    decision: LayoutDecision
    age_seconds: float
    expired: bool


class LayoutCache:
    """
    One JSON file per widget script holding the last Layout Decision.
    Freshness comes from the file's modification time.
    """

    def __init__(self, directory: Path, script_name: str, max_age_minutes: int = DEFAULT_MAX_AGE_MINUTES):
        self.directory = Path(directory)
        self.script_name = script_name
        self.max_age_minutes = max_age_minutes

    @property
    def path(self) -> Path:
        return self.directory / f"{CACHE_FILE_PREFIX}{self.script_name}"

    def read(self) -> Optional[CachedLayout]:
        path = self.path
        if not path.exists():
            return None

        try:
            raw = path.read_text(encoding="utf-8")
            age = max(0.0, time.time() - path.stat().st_mtime)
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Cannot read layout cache %s: %s", path, e)
            return None

        try:
            decision = LayoutDecision.model_validate_json(raw)
        except ValidationError:
            log.warning("Ignoring unreadable layout cache %s", path)
            return None

        return CachedLayout(
            decision=decision,
            age_seconds=age,
            expired=age >= self.max_age_minutes * 60,
        )

    def write(self, decision: LayoutDecision) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path.write_text(decision.model_dump_json(), encoding="utf-8")

    def clear(self) -> bool:
        try:
            self.path.unlink()
            return True
        except FileNotFoundError:
            return False
