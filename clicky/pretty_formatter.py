"""Styled terminal output: summary fields in two columns, boxed tables and trees."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from clicky.parser import to_pretty_data
from clicky.schema import (
    FORMAT_CURRENCY,
    FORMAT_DATE,
    FORMAT_FLOAT,
    FORMAT_HIDE,
    FORMAT_TABLE,
    FORMAT_TREE,
    FieldValue,
    PrettyData,
    PrettyField,
    prettify_field_name,
)
from clicky.style import Style, Theme, parse_style, strip_ansi
from clicky.tree_formatter import TreeFormatter, convert_to_tree_node

Row = dict[str, FieldValue]

_COLUMN_WIDTH = 50
_MIN_CELL_WIDTH = 8
_MAX_CELL_WIDTH = 50

_THEME_COLOR_NAMES = {
    "green": "success",
    "red": "error",
    "blue": "info",
    "yellow": "warning",
}


def _is_struct(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def _is_tree_like(obj: Any) -> bool:
    return callable(getattr(obj, "label", None)) and callable(getattr(obj, "children", None))


def _render_pretty_text(text: Any) -> str:
    ansi = getattr(text, "ansi", None)
    return ansi() if callable(ansi) else str(text)


def _visible_width(text: str) -> int:
    return len(strip_ansi(text))


def _pad_block(text: str, width: int, height: int) -> list[str]:
    lines = text.split("\n")
    lines += [""] * (height - len(lines))
    return [line + " " * max(0, width - _visible_width(line)) for line in lines]


def _join_columns(left: str, right: str, width: int = _COLUMN_WIDTH) -> str:
    """Place two blocks side by side, each padded to ``width`` columns."""
    height = max(left.count("\n"), right.count("\n")) + 1
    left_lines = _pad_block(left, width, height)
    right_lines = _pad_block(right, width, height)
    return "\n".join(a + b for a, b in zip(left_lines, right_lines))


def _json_name(f: dataclasses.Field) -> str:
    tag = f.metadata.get("json", "")
    if tag and tag != "-":
        first = tag.split(",")[0]
        if first:
            return first
    return f.name


@dataclass
class PrettyFormatter:
    """Formats data as styled text for a terminal."""

    theme: Theme = field(default_factory=Theme)
    no_color: bool = False

    def format(self, data: Any) -> str:
        """Format any supported data as styled text.

        Raises TypeError when the data cannot be converted to PrettyData.
        """
        try:
            pretty_data = to_pretty_data(data)
        except TypeError as exc:
            raise TypeError(f"failed to convert to PrettyData: {exc}") from exc
        if pretty_data is None or pretty_data.schema is None:
            return ""
        return self.format_pretty_data(pretty_data)

    def format_pretty_data(self, data: PrettyData) -> str:
        """Format summary fields first, then every non-empty table."""
        summary_fields: list[PrettyField] = []
        table_fields: list[PrettyField] = []
        for pf in data.schema.fields:
            if pf.format == FORMAT_TABLE:
                table_fields.append(pf)
            else:
                summary_fields.append(pf)

        sections: list[str] = []
        if summary_fields:
            summary = self._format_summary(summary_fields, data.values)
            if summary:
                sections.append(summary)
        for pf in table_fields:
            rows = data.tables.get(pf.name)
            if rows:
                sections.append(self._format_table_data(rows, pf))
        return "\n".join(sections)

    def format_value(self, value: Any, field: PrettyField) -> str:
        """Format a single value according to its field description."""
        if value is None:
            return self._apply(("null"), self._style(foreground=self.theme.muted))

        pretty = getattr(value, "pretty", None)
        if callable(pretty):
            return _render_pretty_text(pretty())

        if _is_struct(value):
            return self._format_nested_struct(value, 0)

        field_value = FieldValue(value=value, field=field)
        formatted = field_value.formatted()

        if field.style:
            return self._apply_tailwind(formatted, field.style)
        color = field_value.color()
        if color:
            return self._apply(formatted, self._color_style(color))
        if field.format == FORMAT_TREE:
            return self._format_tree(value, field)
        return self._apply_format_style(formatted, field.format)

    # Styling helpers

    def _style(self, **kwargs: Any) -> Style:
        if self.no_color:
            kwargs.pop("foreground", None)
        return Style(**kwargs)

    def _apply(self, text: str, style: Style) -> str:
        if self.no_color:
            return text
        return style.render(text)

    def _label_style(self) -> Style:
        return self._style(bold=True, foreground=self.theme.primary)

    def _color_style(self, color: str) -> Style:
        if self.no_color:
            return Style()
        theme_name = _THEME_COLOR_NAMES.get(color)
        foreground = getattr(self.theme, theme_name) if theme_name else color
        return Style(foreground=foreground)

    def _apply_format_style(self, text: str, fmt: str) -> str:
        if self.no_color:
            return text
        colors = {
            FORMAT_CURRENCY: self.theme.success,
            FORMAT_DATE: self.theme.info,
            FORMAT_FLOAT: self.theme.secondary,
        }
        if fmt not in colors:
            return text
        return self._apply(text, Style(foreground=colors[fmt]))

    def _apply_tailwind(self, text: str, style_str: str) -> str:
        parsed = parse_style(style_str, self.theme)
        if self.no_color:
            return Style(text_transform=parsed.text_transform).transform(text)
        return parsed.render(text)

    def _styled_label(self, name: str, label_style: str) -> str:
        pretty_name = prettify_field_name(name)
        if label_style:
            return self._apply_tailwind(pretty_name, label_style)
        return self._apply(pretty_name, self._label_style())

    # Summary section

    def _format_summary(self, fields: list[PrettyField], values: dict[str, FieldValue]) -> str:
        cells = [
            self._format_field_value(pf.name, values[pf.name], pf)
            if pf.name in values
            else self._format_missing_field(pf.name)
            for pf in fields
        ]
        rows = []
        for start in range(0, len(cells), 2):
            pair = cells[start:start + 2]
            rows.append(_join_columns(*pair) if len(pair) == 2 else pair[0])
        return "\n".join(rows)

    def _format_field_value(self, name: str, value: FieldValue, pf: PrettyField) -> str:
        label = self._styled_label(name, pf.label_style)
        if pf.format == FORMAT_TREE:
            return f"{label}:\n{self._format_tree(value.value, pf)}"

        formatted = value.formatted()
        if pf.style:
            formatted = self._apply_tailwind(formatted, pf.style)
        elif value.color():
            formatted = self._apply(formatted, self._color_style(value.color()))
        else:
            formatted = self._apply_format_style(formatted, value.field.format)
        return f"{label}: {formatted}"

    def _format_missing_field(self, name: str) -> str:
        label = self._apply(prettify_field_name(name), self._label_style())
        null = self._apply("null", self._style(foreground=self.theme.muted))
        return f"{label}: {null}"

    def _format_nested_struct(self, obj: Any, indent_level: int) -> str:
        pretty = getattr(obj, "pretty", None)
        if callable(pretty):
            return _render_pretty_text(pretty())

        indent = "  " * indent_level
        lines = []
        for f in dataclasses.fields(obj):
            if f.name.startswith("_") or FORMAT_HIDE in f.metadata.get("pretty", ""):
                continue
            value = getattr(obj, f.name)
            label = self._apply(prettify_field_name(_json_name(f)), self._label_style())
            if _is_struct(value):
                text = "\n" + self._format_nested_struct(value, indent_level + 1)
            else:
                text = self.format_value(value, PrettyField())
            lines.append(f"{indent}{label}: {text}")
        return "\n".join(lines)

    # Tables

    def _format_table_data(self, rows: list[Row], pf: PrettyField) -> str:
        if not rows:
            return self._apply("(empty table)", self._style(foreground=self.theme.muted))

        column_fields = pf.table_options.fields
        if column_fields:
            headers = [tf.name for tf in column_fields]
        elif pf.fields:
            headers = [sub.label or sub.name for sub in pf.fields]
        else:
            headers = list(rows[0])

        header_style = pf.table_options.header_style
        header_row = [
            self._apply_tailwind(h, header_style) if header_style
            else self._apply(h, self._label_style())
            for h in headers
        ]
        table = [header_row]
        for row in rows:
            if column_fields:
                table.append([self._table_cell(row, tf, pf) for tf in column_fields])
            elif pf.fields:
                table.append([self._sub_field_cell(row, sub) for sub in pf.fields])
            else:
                table.append([row[h].formatted() if h in row else "" for h in headers])
        return self._format_table_rows(table)

    def _table_cell(self, row: Row, column: PrettyField, table_field: PrettyField) -> str:
        value = row.get(column.name)
        if value is None:
            return ""
        formatted = value.formatted()
        if column.style:
            return self._apply_tailwind(formatted, column.style)
        if table_field.table_options.row_style:
            return self._apply_tailwind(formatted, table_field.table_options.row_style)
        if value.color():
            return self._apply(formatted, self._color_style(value.color()))
        return self._apply_format_style(formatted, column.format)

    def _sub_field_cell(self, row: Row, sub: PrettyField) -> str:
        value = row.get(sub.name)
        if value is None:
            return ""
        formatted = value.formatted()
        if sub.style:
            formatted = self._apply_tailwind(formatted, sub.style)
        return formatted

    def _format_table_rows(self, rows: list[list[str]]) -> str:
        if not rows:
            return ""
        widths = [0] * len(rows[0])
        for row in rows:
            for index, cell in enumerate(row):
                widths[index] = max(widths[index], _visible_width(cell))
        widths = [min(max(w, _MIN_CELL_WIDTH), _MAX_CELL_WIDTH) + 2 for w in widths]

        border = self._style(foreground=self.theme.muted)
        lines = [self._border(widths, "┌", "┬", "┐", border)]
        lines.append(self._table_row(rows[0], widths, border))
        if len(rows) > 1:
            lines.append(self._border(widths, "├", "┼", "┤", border))
        lines.extend(self._table_row(row, widths, border) for row in rows[1:])
        lines.append(self._border(widths, "└", "┴", "┘", border))
        return "\n".join(lines)

    def _table_row(self, row: list[str], widths: list[int], border: Style) -> str:
        bar = self._apply("│", border)
        parts = [bar]
        for cell, width in zip(row, widths):
            padding = width - _visible_width(cell)
            parts.append(" " + cell + " " * max(0, padding - 1) + bar)
        return "".join(parts)

    def _border(self, widths: list[int], left: str, mid: str, right: str, style: Style) -> str:
        middle = self._apply(mid, style).join(self._apply("─" * w, style) for w in widths)
        return self._apply(left, style) + middle + self._apply(right, style)

    # Trees

    def _format_tree(self, value: Any, pf: PrettyField) -> str:
        if value is None:
            return "null"
        node = value if _is_tree_like(value) else convert_to_tree_node(value)
        formatter = TreeFormatter(theme=self.theme, no_color=self.no_color, options=pf.tree_options)
        return formatter.format_tree_from_root(node)