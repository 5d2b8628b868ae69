# weathercal/errors.py
from __future__ import annotations


class LayoutError(Exception):
    """Base error for layout selection."""


class MalformedResponseError(LayoutError):
    """The model reply did not contain a usable layout object."""
