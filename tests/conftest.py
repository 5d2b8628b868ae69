"""Shared test fixtures."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from weathercal.layout_cache import LayoutCache
from weathercal.library import CalendarEvent, Reminder, SunTimes, Widget, WidgetData, WidgetPreferences
from weathercal.models import WidgetItem


class FakeLibrary:
    """In-memory WidgetLibrary that records which setup steps ran."""

    def __init__(self, cache_dir: Path, items=None):
        self.cache_dir = cache_dir
        self.uses_remote_storage = False
        self.data = WidgetData()
        self.calls = []
        self._items = set(items) if items is not None else {i.value for i in WidgetItem}

    async def get_settings(self):
        self.calls.append("get_settings")
        return WidgetPreferences(locale="en_GB", place="Boston")

    async def setup_weather(self):
        self.calls.append("setup_weather")
        self.data.location = {"name": "Boston", "country": "United States"}
        self.data.weather = {"current": {"temp_c": 12.5, "weather_text": "Slight rain"}}
        self.data.sun = SunTimes(
            sunrise=datetime.fromisoformat("2026-10-18T07:05:00-04:00"),
            sunset=datetime.fromisoformat("2026-10-18T18:02:00-04:00"),
        )

    async def setup_events(self):
        self.calls.append("setup_events")
        self.data.events = [
            CalendarEvent(title="Tennis", start_date=datetime.fromisoformat("2026-10-18T10:00:00-04:00")),
        ]

    async def setup_reminders(self):
        self.calls.append("setup_reminders")
        self.data.reminders = [Reminder(title="Buy milk", is_overdue=True,
                                        due_date=datetime.fromisoformat("2026-10-17T09:00:00-04:00"))]

    async def setup_news(self):
        self.calls.append("setup_news")
        self.data.news = ["Storm heads up the coast"]

    def supports(self, item):
        return item in self._items

    async def create_widget(self, markup, name, uses_remote_storage):
        self.calls.append("create_widget")
        return Widget(name=name, markup=markup, uses_remote_storage=uses_remote_storage)


class FakeLLM:
    """Returns a canned reply (or raises) and keeps the requests it saw."""

    def __init__(self, reply='{"layout": "events\\ncurrent", "message": "Tennis soon."}', error=None):
        self.reply = reply
        self.error = error
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def library(cache_dir):
    return FakeLibrary(cache_dir)


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def layout_cache(cache_dir):
    return LayoutCache(cache_dir, "Weather Cal")


@pytest.fixture
def agenda_file(tmp_path):
    path = tmp_path / "agenda.json"
    path.write_text(json.dumps({
        "events": [
            {"title": "Standup", "start_date": "2026-10-18T09:30:00+00:00"},
            {"title": "Yesterday", "start_date": "2026-10-17T09:30:00+00:00"},
            {"title": "Holiday", "start_date": "2026-10-18T00:00:00+00:00", "is_all_day": True},
            {"start_date": "2026-10-19T09:30:00+00:00"},
        ],
        "reminders": [
            {"title": "Pay rent", "due_date": "2026-10-17T12:00:00+00:00"},
            {"title": "Call mum", "due_date": "2026-10-20T12:00:00+00:00"},
            {"title": "Water plants"},
            {"title": "Done already", "completed": True},
        ],
    }))
    return path


@pytest.fixture
def mock_geocode_response():
    """Mock Open-Meteo geocoding response."""
    return {
        "results": [
            {
                "name": "Boston",
                "country": "United States",
                "latitude": 42.36,
                "longitude": -71.06,
                "timezone": "America/New_York",
            }
        ]
    }


@pytest.fixture
def mock_forecast_response():
    """Mock Open-Meteo forecast response."""
    return {
        "current": {
            "temperature_2m": 12.5,
            "relative_humidity_2m": 80,
            "apparent_temperature": 10.1,
            "precipitation": 0.4,
            "wind_speed_10m": 18.0,
            "weather_code": 61,
            "uv_index": 1.2,
            "is_day": 1,
        },
        "hourly": {
            "time": ["2026-10-18T10:00", "2026-10-18T11:00"],
            "temperature_2m": [12.5, 13.0],
            "precipitation_probability": [70, 55],
            "weather_code": [61, 3],
        },
        "daily": {
            "time": ["2026-10-18", "2026-10-19"],
            "weather_code": [61, 0],
            "temperature_2m_max": [14.0, 17.5],
            "temperature_2m_min": [8.0, 9.5],
            "precipitation_probability_max": [80, 5],
            "uv_index_max": [2.0, 4.5],
            "sunrise": ["2026-10-18T07:05", "2026-10-19T07:06"],
            "sunset": ["2026-10-18T18:02", "2026-10-19T18:00"],
        },
    }


@pytest.fixture
def make_llm():
    return FakeLLM


@pytest.fixture
def make_library():
    return FakeLibrary
