# weathercal/response_parser.py
from __future__ import annotations

import json

from pydantic import ValidationError

from weathercal.errors import MalformedResponseError
from weathercal.models import LayoutDecision


def extract_json_object(raw: str) -> str:
    """
    Cut a model reply down to its JSON object: everything before the first
    '{' and after the last '}' is dropped. Text without braces is returned
    as-is so the JSON parser reports the problem.
    """
    start = raw.find("{")
    end = raw.rfind("}")
    if start != -1 and end != -1:
        return raw[start:end + 1]
    return raw


def parse_layout_decision(raw: str) -> LayoutDecision:
    cleaned = extract_json_object(raw or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"model reply is not JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError("model reply is not a JSON object")

    try:
        return LayoutDecision.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError("model reply is missing layout/message") from e
