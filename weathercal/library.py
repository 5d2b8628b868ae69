# weathercal/library.py
"""
Widget library contract and the adapter that backs it with the data services.

The layout agent only ever talks to a `WidgetLibrary`: it asks it to load
settings and data, checks which items it can draw, and hands it the final
markup. `ServiceWidgetLibrary` is the stock implementation used by the API
and the preview page.
"""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol

from pydantic import BaseModel, ValidationError

from weathercal.models import LayoutDecision, WidgetItem
from weathercal.news_service import get_news_headlines
from weathercal.settings import Settings, settings as default_settings
from weathercal.weather_service import get_weather_summary

log = logging.getLogger(__name__)


# -----------------------------
# Data records
# -----------------------------
class CalendarEvent(BaseModel):
    title: str
    start_date: datetime
    is_all_day: bool = False


class Reminder(BaseModel):
    title: str
    due_date: Optional[datetime] = None
    completed: bool = False
    is_overdue: bool = False


@dataclass
class SunTimes:
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None


@dataclass
class WidgetData:
    location: Dict[str, Any] = field(default_factory=dict)
    weather: Dict[str, Any] = field(default_factory=dict)
    sun: SunTimes = field(default_factory=SunTimes)
    events: List[CalendarEvent] = field(default_factory=list)
    reminders: List[Reminder] = field(default_factory=list)
    news: List[str] = field(default_factory=list)


@dataclass
class WidgetPreferences:
    locale: str = ""
    place: str = ""


@dataclass
class Widget:
    name: str
    markup: str
    uses_remote_storage: bool = False
    data: Dict[str, Any] = field(default_factory=dict)
    layout: Optional[LayoutDecision] = None
    context: Optional[str] = None
    preview: Optional[str] = None

    def present(self, size: str) -> "Widget":
        self.preview = size
        return self


class WidgetLibrary(Protocol):
    cache_dir: Path
    uses_remote_storage: bool
    data: WidgetData

    async def get_settings(self) -> WidgetPreferences: ...

    async def setup_weather(self) -> None: ...

    async def setup_events(self) -> None: ...

    async def setup_reminders(self) -> None: ...

    async def setup_news(self) -> None: ...

    def supports(self, item: str) -> bool: ...

    async def create_widget(self, markup: str, name: str, uses_remote_storage: bool) -> Widget: ...


# -----------------------------
# Helpers
# -----------------------------
def _local(dt: datetime) -> datetime:
    # naive timestamps are taken as local time
    return dt if dt.tzinfo else dt.astimezone()


def _parse_local_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return _local(datetime.fromisoformat(value))
    except ValueError:
        return None


def load_agenda(path: Optional[Path], now: Optional[datetime] = None) -> tuple[List[CalendarEvent], List[Reminder]]:
    """
    Read {"events": [...], "reminders": [...]} from a local JSON file.
    Past events and completed reminders are dropped; reminders due before
    `now` are flagged overdue. Invalid entries are skipped.
    """
    if path is None or not Path(path).exists():
        return [], []

    now = _local(now or datetime.now())
    raw = json.loads(Path(path).read_text(encoding="utf-8"))

    events: List[CalendarEvent] = []
    for entry in raw.get("events") or []:
        try:
            event = CalendarEvent.model_validate(entry)
        except ValidationError:
            log.warning("Skipping invalid agenda event")
            continue
        event.start_date = _local(event.start_date)
        if event.is_all_day:
            if event.start_date.date() < now.date():
                continue
        elif event.start_date < now:
            continue
        events.append(event)
    events.sort(key=lambda e: e.start_date)

    reminders: List[Reminder] = []
    for entry in raw.get("reminders") or []:
        try:
            reminder = Reminder.model_validate(entry)
        except ValidationError:
            log.warning("Skipping invalid agenda reminder")
            continue
        if reminder.completed:
            continue
        if reminder.due_date is not None:
            reminder.due_date = _local(reminder.due_date)
            reminder.is_overdue = reminder.due_date < now
        reminders.append(reminder)

    return events, reminders


# -----------------------------
# Service-backed library
# -----------------------------
class ServiceWidgetLibrary:
    """WidgetLibrary over Open-Meteo, SerpAPI news and a local agenda file."""

    def __init__(self, config: Optional[Settings] = None, items: Optional[Iterable[str]] = None):
        self.config = config or default_settings
        self.cache_dir = Path(self.config.cache_dir)
        self.uses_remote_storage = self.config.remote_storage
        self.data = WidgetData()
        self.preferences = WidgetPreferences()
        self._items = set(items) if items is not None else {item.value for item in WidgetItem}
        self._agenda: Optional[tuple[List[CalendarEvent], List[Reminder]]] = None

    async def get_settings(self) -> WidgetPreferences:
        self.preferences = WidgetPreferences(
            locale=self.config.widget_locale,
            place=self.config.place,
        )
        return self.preferences

    async def setup_weather(self) -> None:
        summary, err = await asyncio.to_thread(get_weather_summary, self.preferences.place or self.config.place)
        if err or not summary:
            log.error("Weather unavailable: %s", err)
            return

        self.data.location = summary["location"]
        self.data.weather = {
            "current": summary["current"],
            "hourly": summary["hourly"],
            "daily": summary["daily"],
        }
        self.data.sun = SunTimes(
            sunrise=_parse_local_time(summary["sun"].get("sunrise")),
            sunset=_parse_local_time(summary["sun"].get("sunset")),
        )

    async def setup_events(self) -> None:
        events, _ = await self._load_agenda()
        self.data.events = events

    async def setup_reminders(self) -> None:
        _, reminders = await self._load_agenda()
        self.data.reminders = reminders

    async def setup_news(self) -> None:
        headlines, err = await asyncio.to_thread(get_news_headlines, self.preferences.place or self.config.place)
        if err:
            log.error("News unavailable: %s", err)
        self.data.news = headlines

    async def _load_agenda(self):
        # events and reminders share one read of the file
        if self._agenda is None:
            try:
                self._agenda = await asyncio.to_thread(load_agenda, self.config.agenda_file)
            except (OSError, ValueError, AttributeError) as e:
                log.error("Agenda file unreadable: %s", e)
                self._agenda = ([], [])
        return self._agenda

    def supports(self, item: str) -> bool:
        return item in self._items

    async def create_widget(self, markup: str, name: str, uses_remote_storage: bool) -> Widget:
        return Widget(
            name=name,
            markup=markup,
            uses_remote_storage=uses_remote_storage,
            data=snapshot(self.data),
        )


def snapshot(data: WidgetData) -> Dict[str, Any]:
    out = asdict(data)
    out["events"] = [e.model_dump(mode="json") for e in data.events]
    out["reminders"] = [r.model_dump(mode="json") for r in data.reminders]
    out["sun"] = {k: v.isoformat() if v else None for k, v in out["sun"].items()}
    return out
