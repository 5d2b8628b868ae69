# weathercal/models.py
from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel


class WidgetItem(str, Enum):
    """Named content blocks the widget library knows how to draw."""

    DATE = "date"
    EVENTS = "events"
    REMINDERS = "reminders"
    CURRENT = "current"
    FUTURE = "future"
    HOURLY = "hourly"
    DAILY = "daily"
    SUNRISE = "sunrise"
    BATTERY = "battery"
    UVI = "uvi"
    WEEK = "week"
    NEWS = "news"

    @property
    def description(self) -> str:
        return ITEM_DESCRIPTIONS[self]

    @classmethod
    def from_name(cls, name: str) -> "WidgetItem | None":
        try:
            return cls(name.strip())
        except ValueError:
            return None


ITEM_DESCRIPTIONS = {
    WidgetItem.DATE: "The current date. Shows a large date, but becomes smaller if events are also shown.",
    WidgetItem.EVENTS: "A list of upcoming calendar events. A top priority if there are events soon.",
    WidgetItem.REMINDERS: "A list of incomplete reminders. Important if items are overdue or due soon.",
    WidgetItem.CURRENT: "The current weather conditions and temperature.",
    WidgetItem.FUTURE: "A summary of the weather for the next hour (day) or tomorrow (night).",
    WidgetItem.HOURLY: "A multi-hour weather forecast. Good for planning an outing.",
    WidgetItem.DAILY: "A multi-day weather forecast. Good for planning ahead.",
    WidgetItem.SUNRISE: "The next sunrise or sunset time. Most relevant near those times.",
    WidgetItem.BATTERY: "The current battery level and charging status. Most relevant when the battery is low.",
    WidgetItem.UVI: "The current UV Index. Important on sunny days.",
    WidgetItem.WEEK: "The current week number of the year.",
    WidgetItem.NEWS: "The latest news headline from the configured news source.",
}


class LayoutDecision(BaseModel):
    """Which widget items to show, in order, plus a one-line message."""

    layout: str
    message: str

    def item_names(self) -> List[str]:
        return [name.strip() for name in self.layout.split("\n") if name.strip()]

    def items(self) -> List[WidgetItem]:
        # unknown names are dropped, order kept
        found = (WidgetItem.from_name(name) for name in self.item_names())
        return [item for item in found if item is not None]


FALLBACK_DECISION = LayoutDecision(
    layout="date\ncurrent\nhourly",
    message="Here is your daily summary.",
)
