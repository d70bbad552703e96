"""YAML output of the original data behind a PrettyData."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml

from clicky.parser import to_pretty_data
from clicky.schema import PrettyData

_SCALARS = (str, int, float, bool, type(None))


class _Dumper(yaml.SafeDumper):
    """Indents sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (bool, int, float, str, bytes, list, tuple, dict, set, frozenset)):
        return not value
    return False


def _sort_key(item: tuple[Any, Any]) -> str:
    return str(item[0])


def _to_yamlable(value: Any) -> Any:
    """Convert dataclasses and other objects into plain YAML-safe values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in dataclasses.fields(value):
            if f.name.startswith("_"):
                continue
            tag = f.metadata.get("yaml", "")
            if tag == "-":
                continue
            parts = tag.split(",") if tag else [""]
            options = parts[1:]
            item = getattr(value, f.name)
            if "omitempty" in options and _is_empty(item):
                continue
            converted = _to_yamlable(item)
            if "inline" in options and isinstance(converted, dict):
                out.update(converted)
                continue
            out[parts[0] or f.name.lower()] = converted
        return out
    if isinstance(value, Mapping):
        return {
            key if isinstance(key, _SCALARS) else str(key): _to_yamlable(val)
            for key, val in sorted(value.items(), key=_sort_key)
        }
    if isinstance(value, enum.Enum):
        return _to_yamlable(value.value)
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, (list, tuple)):
        return [_to_yamlable(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return [_to_yamlable(item) for item in sorted(value, key=str)]
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value
    if isinstance(value, _dt.time):
        return value.isoformat()
    if isinstance(value, _SCALARS):
        return value
    attrs = getattr(value, "__dict__", None)
    if isinstance(attrs, dict):
        return {
            key.lower(): _to_yamlable(val)
            for key, val in attrs.items()
            if not key.startswith("_")
        }
    return str(value)


def _dump(data: Any) -> str:
    text = yaml.dump(
        _to_yamlable(data),
        Dumper=_Dumper,
        indent=4,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    if text.endswith("\n...\n"):
        text = text[: -len("...\n")]
    return text


@dataclass
class YAMLFormatter:
    """Formats data as block-style YAML."""

    def format(self, data: Any) -> str:
        """Format data as YAML; None gives ``null``."""
        if data is None:
            return "null"
        pretty = to_pretty_data(data)
        if pretty.original is None:
            return ""
        return self.format_pretty_data(pretty)

    def format_pretty_data(self, data: PrettyData) -> str:
        """Format the original data of a PrettyData as YAML."""
        return _dump(data.original)