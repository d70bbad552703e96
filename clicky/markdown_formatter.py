"""Markdown output of PrettyData: a definition list, tables and bullet trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from clicky.parser import to_pretty_data
from clicky.schema import FORMAT_TABLE, FORMAT_TREE, FieldValue, PrettyData, PrettyField

Row = dict[str, FieldValue]


def _is_tree_like(obj: Any) -> bool:
    return callable(getattr(obj, "label", None)) and callable(getattr(obj, "children", None))


def _pretty_markdown(obj: Any) -> str | None:
    """Markdown of an object's ``pretty()`` text, or None if it has none."""
    pretty = getattr(obj, "pretty", None)
    if not callable(pretty):
        return None
    text = pretty()
    markdown = getattr(text, "markdown", None)
    return markdown() if callable(markdown) else str(text)


def _display_name(pf: PrettyField) -> str:
    return pf.label or pf.name


@dataclass
class MarkdownFormatter:
    """Formats data as Markdown."""

    no_color: bool = False

    def format(self, data: Any) -> str:
        """Format data as Markdown; pretty objects give their own Markdown.

        Raises TypeError when the data cannot be converted to PrettyData.
        """
        markdown = _pretty_markdown(data)
        if markdown is not None:
            return markdown
        try:
            pretty_data = to_pretty_data(data)
        except TypeError as exc:
            raise TypeError(f"failed to convert to PrettyData: {exc}") from exc
        if pretty_data is None or pretty_data.schema is None:
            return ""
        return self.format_pretty_data(pretty_data)

    def format_pretty_data(self, data: PrettyData) -> str:
        """Summary fields first, then tables, then trees, separated by blank lines."""
        summary_fields: list[PrettyField] = []
        table_fields: list[PrettyField] = []
        tree_fields: list[PrettyField] = []
        for pf in data.schema.fields:
            if pf.format == FORMAT_TABLE:
                table_fields.append(pf)
            elif pf.format == FORMAT_TREE:
                tree_fields.append(pf)
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
                sections.append(self._format_table(rows))

        for pf in tree_fields:
            value = data.values.get(pf.name)
            if value is not None:
                tree = self._format_tree_data(pf, value)
                if tree:
                    sections.append(tree)

        return "\n\n".join(sections)

    @staticmethod
    def _format_summary(fields: list[PrettyField], values: dict[str, FieldValue]) -> str:
        return "".join(
            f"**{_display_name(pf)}**: {values[pf.name].markdown()}\n\n"
            for pf in fields
            if pf.name in values
        )

    @staticmethod
    def _format_table(rows: list[Row]) -> str:
        if not rows:
            return "*No data*"
        headers = sorted(rows[0])
        lines = [
            "| " + "".join(f"{h} | " for h in headers),
            "| " + "--- | " * len(headers),
        ]
        for row in rows:
            cells = (
                row[h].markdown().replace("|", "\\|") if h in row else ""
                for h in headers
            )
            lines.append("| " + "".join(f"{cell} | " for cell in cells))
        return "\n".join(lines) + "\n"

    def _format_tree_data(self, pf: PrettyField, value: FieldValue) -> str:
        if _is_tree_like(value.value):
            return self._format_tree_node(value.value, 0)
        return f"**{_display_name(pf)}**: {value.markdown()}"

    def _format_tree_node(self, node: Any, depth: int) -> str:
        if node is None:
            return ""
        content = _pretty_markdown(node)
        if content is None:
            content = node.label()
        if depth == 0:
            lines = [f"**{content}**\n"]
        else:
            lines = [f"{'  ' * depth}- {content}\n"]
        lines.extend(self._format_tree_node(child, depth + 1) for child in node.children() or [])
        return "".join(lines)