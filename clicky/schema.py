"""Field schema, field values and tag parsing for formatted output."""

from __future__ import annotations

import datetime as _dt
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

FORMAT_TABLE = "table"
FORMAT_TREE = "tree"
FORMAT_HIDE = "hide"
FORMAT_STRUCT = "struct"
FORMAT_PRETTY = "pretty"
FORMAT_CURRENCY = "currency"
FORMAT_DATE = "date"
FORMAT_FLOAT = "float"
FORMAT_NUMBER = "number"


@dataclass
class TableOptions:
    """Options for a field rendered as a table."""

    title: str = ""
    sort_field: str = ""
    sort_direction: str = ""
    fields: list[PrettyField] = field(default_factory=list)
    header_style: str = ""
    row_style: str = ""


@dataclass
class TreeOptions:
    """Options for a field rendered as a tree."""

    show_icons: bool = True
    compact: bool = False
    max_depth: int = -1
    branch_prefix: str = "├── "
    last_prefix: str = "└── "
    continue_prefix: str = "│   "
    indent_prefix: str = "    "
    collapsed_nodes: set[str] = field(default_factory=set)


def default_tree_options() -> TreeOptions:
    """Tree options with box-drawing connectors and no depth limit."""
    return TreeOptions()


@dataclass
class PrettyField:
    """Description of how one field is labelled and formatted."""

    name: str = ""
    label: str = ""
    format: str = ""
    color: str = ""
    style: str = ""
    label_style: str = ""
    table_options: TableOptions = field(default_factory=TableOptions)
    tree_options: TreeOptions | None = None
    fields: list[PrettyField] = field(default_factory=list)
    format_options: dict[str, str] = field(default_factory=dict)


@dataclass
class PrettyObject:
    """An ordered list of field descriptions."""

    fields: list[PrettyField] = field(default_factory=list)


def _format_scalar(value: Any, fmt: str) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        if fmt == FORMAT_CURRENCY:
            return f"${value:,.2f}"
        if fmt == FORMAT_FLOAT:
            return f"{value:.2f}"
        return str(value)
    if isinstance(value, _dt.datetime):
        if fmt == FORMAT_DATE:
            return value.strftime("%Y-%m-%d %H:%M:%S")
        return value.isoformat()
    if isinstance(value, _dt.date):
        return value.isoformat()
    return str(value)


def _format_value(value: Any, fmt: str, item_sep: str, line_sep: str) -> str:
    if isinstance(value, Mapping):
        return line_sep.join(
            f"{key}: {_format_value(value[key], '', item_sep, line_sep)}"
            for key in sorted(value, key=str)
        )
    if isinstance(value, (list, tuple, set, frozenset)):
        return item_sep.join(_format_value(item, fmt, item_sep, line_sep) for item in value)
    return _format_scalar(value, fmt)


@dataclass
class FieldValue:
    """A value together with the field description that formats it."""

    value: Any = None
    field: PrettyField = field(default_factory=PrettyField)

    def formatted(self) -> str:
        """The value as display text; mappings become one ``key: value`` line each."""
        return _format_value(self.value, self.field.format, ", ", "\n")

    def plain(self) -> str:
        """The value as unstyled text, as used for CSV cells."""
        return self.formatted()

    def markdown(self) -> str:
        """The value as single-line Markdown text."""
        return _format_value(self.value, self.field.format, ", ", "<br>")

    def color(self) -> str:
        """The colour named by the field's ``color=`` tag, or an empty string."""
        spec = self.field.color
        if "=" not in spec:
            return ""
        return spec.split("=", 1)[1].strip()

    def _nested(self) -> dict[str, Any]:
        if isinstance(self.value, Mapping):
            return {str(key): val for key, val in self.value.items()}
        return {}

    def has_nested_fields(self) -> bool:
        """Whether the value is a non-empty mapping."""
        return bool(self._nested())

    def nested_field_keys(self) -> list[str]:
        """The nested keys, sorted."""
        return sorted(self._nested())

    def nested_field(self, key: str) -> FieldValue:
        """The nested value under ``key``; raises KeyError if there is none."""
        nested = self._nested()
        if key not in nested:
            raise KeyError(key)
        return FieldValue(value=nested[key], field=PrettyField(name=key, label=key))


@dataclass
class PrettyData:
    """A schema with its field values, table rows and the original data."""

    schema: PrettyObject | None = field(default_factory=PrettyObject)
    values: dict[str, FieldValue] = field(default_factory=dict)
    tables: dict[str, list[dict[str, FieldValue]]] = field(default_factory=dict)
    original: Any = None

    def get_value(self, name: str) -> FieldValue | None:
        """The value of a named field, or None."""
        return self.values.get(name)

    def get_table(self, name: str) -> list[dict[str, FieldValue]] | None:
        """The rows of a named table field, or None."""
        return self.tables.get(name)


def parse_pretty_tag(field_name: str, tag: str) -> PrettyField:
    """Parse a comma-separated ``pretty`` tag into a field description."""
    pf = PrettyField(name=field_name, label=field_name)
    if not tag:
        return pf

    for raw in tag.split(","):
        part = raw.strip()
        if part.startswith("label="):
            pf.label = part[len("label="):]
        elif part.startswith("format="):
            pf.format = part[len("format="):]
        elif part.startswith("color=") or "color" in part:
            pf.color = part
        elif part == FORMAT_TABLE:
            pf.format = FORMAT_TABLE
        elif part == FORMAT_TREE:
            pf.format = FORMAT_TREE
            if pf.tree_options is None:
                pf.tree_options = default_tree_options()
        elif part == FORMAT_STRUCT:
            pf.format = FORMAT_STRUCT
        elif part.startswith("title="):
            pf.table_options.title = part[len("title="):]
        elif part.startswith("sort="):
            pf.table_options.sort_field = part[len("sort="):]
        elif part.startswith("dir="):
            pf.table_options.sort_direction = part[len("dir="):]
        elif part == FORMAT_HIDE:
            pf.format = FORMAT_HIDE

    if not pf.label:
        pf.label = field_name
    return pf


def _is_title_separator(ch: str) -> bool:
    if ch.isascii():
        return not (ch.isalnum() or ch == "_")
    return ch.isspace()


def _title(word: str) -> str:
    out = []
    prev = " "
    for ch in word:
        out.append(ch.upper() if _is_title_separator(prev) else ch)
        prev = ch
    return "".join(out)


def split_camel_case(text: str) -> list[str]:
    """Split camelCase into words, keeping runs of capitals together."""
    words: list[str] = []
    current = ""
    for i, ch in enumerate(text):
        if i > 0 and "A" <= ch <= "Z" and "a" <= text[i - 1] <= "z" and current:
            words.append(current)
            current = ""
        current += ch
    if current:
        words.append(current)
    return words


def prettify_field_name(name: str) -> str:
    """Turn snake_case, kebab-case or camelCase names into Title Case."""
    words = [w for w in name.replace("-", "_").split("_") if w]
    if len(words) == 1:
        words = split_camel_case(name)
    return " ".join(_title(word.lower()) for word in words)