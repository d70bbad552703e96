"""JSON output of the original data behind a PrettyData."""

from __future__ import annotations

import base64
import dataclasses
import datetime as _dt
import enum
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from clicky.parser import to_pretty_data
from clicky.schema import PrettyData

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (bool, int, float)):
        return not value
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return not value
    return False


def _to_jsonable(value: Any) -> Any:
    """Turn dataclasses into dicts keyed by their ``json`` tags, recursively."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in dataclasses.fields(value):
            if f.name.startswith("_"):
                continue
            tag = f.metadata.get("json", "")
            if tag == "-":
                continue
            parts = tag.split(",") if tag else [""]
            item = getattr(value, f.name)
            if "omitempty" in parts[1:] and _is_empty(item):
                continue
            out[parts[0] or f.name] = _to_jsonable(item)
        return out
    if isinstance(value, Mapping):
        return {str(key): _to_jsonable(val) for key, val in value.items()}
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, enum.Enum):
        return _to_jsonable(value.value)
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    return value


def _escape_html(text: str) -> str:
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


@dataclass
class JSONFormatter:
    """Formats data as JSON, indented by ``indent``."""

    indent: str = "  "

    def format(self, data: Any) -> str:
        """Format data as JSON; None gives an empty string."""
        pretty = to_pretty_data(data)
        if pretty.original is None:
            return ""
        return self.format_pretty_data(pretty)

    def format_pretty_data(self, data: PrettyData | None) -> str:
        """Format the original data of a PrettyData; None gives ``null``."""
        if data is None:
            return "null"
        return self._dump(data.original, indent=self.indent)

    def format_compact(self, data: Any) -> str:
        """Format data as JSON without any whitespace."""
        return self._dump(data, separators=(",", ":"))

    @staticmethod
    def _dump(data: Any, **kwargs: Any) -> str:
        text = json.dumps(_to_jsonable(data), ensure_ascii=False, allow_nan=False, **kwargs)
        return _escape_html(text)