# weathercal/renderer.py
from __future__ import annotations

from typing import List, Sequence, TypeVar

from weathercal.library import WidgetLibrary
from weathercal.models import LayoutDecision

T = TypeVar("T")

INDENT = "  "


def distribute(items: Sequence[T], columns: int) -> List[List[T]]:
    """Round-robin: item i lands in column i % columns."""
    if columns < 1:
        raise ValueError("columns must be positive")
    out: List[List[T]] = [[] for _ in range(columns)]
    for index, item in enumerate(items):
        out[index % columns].append(item)
    return out


def escape_message(message: str) -> str:
    # one line only: a newline in the message would start a new markup line
    return " ".join(message.split()).replace('"', '\\"')


def renderable_items(decision: LayoutDecision, library: WidgetLibrary) -> List[str]:
    return [item.value for item in decision.items() if library.supports(item.value)]


def _column_block(items: List[str]) -> List[str]:
    lines = [INDENT + "column"]
    lines.extend(INDENT * 2 + item for item in items)
    return lines


def render_header(message: str) -> str:
    """The message row on its own, with no items below it."""
    return "\n".join([
        "row",
        INDENT + "column",
        INDENT * 2 + "center",
        INDENT * 2 + f"text({escape_message(message)})",
    ]) + "\n"


def render_layout(decision: LayoutDecision, library: WidgetLibrary, columns: int = 3) -> str:
    """
    Build the widget library's layout markup: a header row with the message
    centred in one column, then a content row with the items spread over
    `columns` columns. Empty columns are left out.
    """
    if columns not in (2, 3):
        raise ValueError("layout supports 2 or 3 columns")

    lines = [render_header(decision.message), "row"]
    for column in distribute(renderable_items(decision, library), columns):
        if column:
            lines.extend(_column_block(column))
    return "\n".join(lines) + "\n"
