"""CSV output of PrettyData: table rows, flattened trees or a single record."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from clicky.parser import to_pretty_data
from clicky.schema import FORMAT_TABLE, FORMAT_TREE, PrettyData, PrettyField


def _is_tree_like(obj: Any) -> bool:
    return callable(getattr(obj, "label", None)) and callable(getattr(obj, "children", None))


def _validate_separator(separator: str) -> None:
    if len(separator) != 1 or separator in ('"', "\r", "\n", "\0", "\ufffd"):
        raise ValueError(f"invalid CSV separator: {separator!r}")


def _needs_quotes(value: str, separator: str) -> bool:
    if value == "":
        return False
    if value == "\\.":
        return True
    if any(ch in value for ch in (separator, '"', "\r", "\n")):
        return True
    return value[0].isspace()


def _csv_line(values: Iterable[str], separator: str) -> str:
    cells = []
    for value in values:
        if _needs_quotes(value, separator):
            value = '"' + value.replace('"', '""') + '"'
        cells.append(value)
    return separator.join(cells) + "\n"


@dataclass
class CSVFormatter:
    """Formats data as CSV with the given single-character separator."""

    separator: str = ","

    def format(self, data: Any) -> str:
        """Format data as CSV; pretty objects give their plain text."""
        pretty = getattr(data, "pretty", None)
        if callable(pretty):
            return str(pretty())
        try:
            pretty_data = to_pretty_data(data)
        except TypeError as exc:
            raise TypeError(f"failed to convert to PrettyData: {exc}") from exc
        if pretty_data is None or pretty_data.schema is None:
            return ""
        return self.format_pretty_data(pretty_data)

    def format_pretty_data(self, data: PrettyData | None) -> str:
        """Format PrettyData as CSV, choosing a layout from its fields."""
        if data is None or data.schema is None:
            return ""
        _validate_separator(self.separator)

        table_field: PrettyField | None = None
        tree_field: PrettyField | None = None
        other_fields: list[PrettyField] = []
        for pf in data.schema.fields:
            if pf.format == FORMAT_TABLE:
                table_field = pf
            elif pf.format == FORMAT_TREE:
                tree_field = pf
            else:
                other_fields.append(pf)

        if tree_field is not None and not other_fields and table_field is None:
            rows = self._tree_rows(data, tree_field)
        elif table_field is not None and not other_fields:
            rows = self._table_rows(data, table_field)
        else:
            rows = self._record_rows(data)
        return "".join(_csv_line(row, self.separator) for row in rows)

    def _tree_rows(self, data: PrettyData, tree_field: PrettyField) -> list[list[str]]:
        field_value = data.values.get(tree_field.name)
        if field_value is None:
            return []
        if _is_tree_like(field_value.value):
            return [["Level", "Name", "Details"], *self._flatten_tree(field_value.value, 0)]
        return [[tree_field.name], [field_value.plain()]]

    @staticmethod
    def _table_rows(data: PrettyData, table_field: PrettyField) -> list[list[str]]:
        table = data.tables.get(table_field.name)
        if not table:
            return []
        headers = sorted(table[0])
        rows = [headers]
        for row in table:
            rows.append([row[h].plain() if h in row else "" for h in headers])
        return rows

    @staticmethod
    def _record_rows(data: PrettyData) -> list[list[str]]:
        headers: list[str] = []
        values: list[str] = []
        for pf in data.schema.fields:
            if pf.format in (FORMAT_TABLE, FORMAT_TREE):
                continue
            field_value = data.values.get(pf.name)
            if field_value is None:
                continue
            headers.append(pf.name)
            values.append(field_value.plain())
        return [headers, values] if headers else []

    def _flatten_tree(self, node: Any, depth: int) -> list[list[str]]:
        if node is None:
            return []
        pretty = getattr(node, "pretty", None)
        content = str(pretty()) if callable(pretty) else node.label()
        rows = [[str(depth), "  " * depth + content, ""]]
        for child in node.children() or []:
            rows.extend(self._flatten_tree(child, depth + 1))
        return rows