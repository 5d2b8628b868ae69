# weathercal/context.py
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

import psutil

from weathercal.library import WidgetLibrary

log = logging.getLogger(__name__)


def read_battery() -> Dict[str, Any]:
    """Host battery as {"level": "NN%", "is_charging": bool}; None values without one."""
    try:
        battery = psutil.sensors_battery()
    except (AttributeError, NotImplementedError, OSError):
        battery = None
    if battery is None:
        return {"level": None, "is_charging": None}
    return {
        "level": f"{round(battery.percent)}%",
        "is_charging": bool(battery.power_plugged),
    }


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


def gather_context(
    library: WidgetLibrary,
    now: Optional[datetime] = None,
    battery: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Snapshot of what the model sees. Call after the library's setup_* steps."""
    data = library.data
    now = now or datetime.now().astimezone()

    return {
        "current_time": now.isoformat(),
        "location": data.location,
        "weather": data.weather,
        "sun_times": {
            "sunrise": _iso(data.sun.sunrise),
            "sunset": _iso(data.sun.sunset),
        },
        "events": [
            {
                "title": e.title,
                "start_date": e.start_date.isoformat(),
                "is_all_day": e.is_all_day,
            }
            for e in data.events
        ],
        "reminders": [
            {
                "title": r.title,
                "due_date": _iso(r.due_date),
                "is_overdue": r.is_overdue,
            }
            for r in data.reminders
        ],
        "battery": battery if battery is not None else read_battery(),
        "news_headlines": data.news,
    }


def serialize_context(context: Dict[str, Any]) -> str:
    return json.dumps(context, indent=2, ensure_ascii=False, default=str)
