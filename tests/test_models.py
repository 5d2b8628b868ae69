"""Tests for widget items and the Layout Decision model."""

from weathercal.models import FALLBACK_DECISION, LayoutDecision, WidgetItem
from weathercal.prompts import LAYOUT_SYSTEM_PROMPT


class TestWidgetItem:

    def test_vocabulary(self):
        assert {i.value for i in WidgetItem} == {
            "date", "events", "reminders", "current", "future", "hourly",
            "daily", "sunrise", "battery", "uvi", "week", "news",
        }

    def test_from_name_strips(self):
        assert WidgetItem.from_name(" hourly ") is WidgetItem.HOURLY

    def test_from_name_unknown(self):
        assert WidgetItem.from_name("horoscope") is None

    def test_every_item_described(self):
        for item in WidgetItem:
            assert item.description


class TestLayoutDecision:

    def test_item_names_skip_blanks(self):
        decision = LayoutDecision(layout="date\n\n  current \n", message="hi")
        assert decision.item_names() == ["date", "current"]

    def test_items_drop_unknown_names(self):
        decision = LayoutDecision(layout="news\nhoroscope\nweek", message="hi")
        assert decision.items() == [WidgetItem.NEWS, WidgetItem.WEEK]

    def test_fallback(self):
        assert FALLBACK_DECISION.layout == "date\ncurrent\nhourly"
        assert FALLBACK_DECISION.message == "Here is your daily summary."


class TestPrompt:

    def test_lists_every_item(self):
        for item in WidgetItem:
            assert f"'{item.value}'" in LAYOUT_SYSTEM_PROMPT

    def test_describes_output_shape(self):
        assert '{"layout": "item1\\nitem2\\nitem3"' in LAYOUT_SYSTEM_PROMPT
