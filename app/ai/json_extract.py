from __future__ import annotations

import json
import re
from typing import Any, Iterator

from app.ai.types import UpstreamError

_FENCED_JSON_RE = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_OPENER_RE = re.compile(r"[\[{]")
_DECODER = json.JSONDecoder()


def _top_level_values(text: str) -> Iterator[Any]:
    index = 0
    while True:
        match = _OPENER_RE.search(text, index)
        if not match:
            return
        try:
            value, end = _DECODER.raw_decode(text, match.start())
        except json.JSONDecodeError:
            index = match.start() + 1
            continue
        yield value
        index = end


def extract_json_payload(text: str) -> Any:
    """Pull the JSON payload out of generator text.

    Tries a fenced ```json block, then the first top-level object, then the
    first top-level array, then the whole text.
    """
    raw = (text or "").strip()

    fenced = _FENCED_JSON_RE.search(raw)
    if fenced:
        try:
            return json.loads(fenced.group(1))
        except json.JSONDecodeError:
            raw = fenced.group(1).strip()

    first_array: list[Any] | None = None
    for value in _top_level_values(raw):
        if isinstance(value, dict):
            return value
        if first_array is None and isinstance(value, list):
            first_array = value
    if first_array is not None:
        return first_array

    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise UpstreamError(f"Generator output is not valid JSON: {exc}", code="invalid_json") from exc


def recommendations_from_payload(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("recommendations", "jobs"):
            items = payload.get(key)
            if isinstance(items, list):
                return items
    return []
