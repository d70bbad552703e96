"""Tree nodes and their rendering as indented text trees."""

from __future__ import annotations

import abc
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from clicky.schema import TreeOptions, default_tree_options

_RESET = "\x1b[0m"

# Default SGR foreground codes for the semantic theme colours.
_DEFAULT_COLORS = {
    "info": "34",
    "success": "32",
    "error": "31",
    "warning": "33",
}

_COLOR_PREFIXES = (
    ("text-blue", "info"),
    ("text-green", "success"),
    ("text-red", "error"),
    ("text-yellow", "warning"),
)

_ATTRIBUTES = {
    "font-bold": "1",
    "italic": "3",
    "underline": "4",
}


class TreeNode(abc.ABC):
    """A node of a tree: a label, an optional icon and style, and children."""

    @abc.abstractmethod
    def label(self) -> str:
        """The text shown for this node."""

    def icon(self) -> str:
        """An icon shown before the label, or an empty string."""
        return ""

    def style(self) -> str:
        """Space-separated style classes for the label, or an empty string."""
        return ""

    def children(self) -> list[TreeNode]:
        """The child nodes, in display order."""
        return []


class SimpleTreeNode(TreeNode):
    """A tree node holding its label, icon, style, children and metadata."""

    def __init__(
        self,
        label: str = "",
        icon: str = "",
        style: str = "",
        children: Iterable[TreeNode] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        self._label = label
        self._icon = icon
        self._style = style
        self._children: list[TreeNode] = list(children or [])
        self.metadata: dict[str, Any] = dict(metadata or {})

    def label(self) -> str:
        return self._label

    def icon(self) -> str:
        return self._icon

    def style(self) -> str:
        return self._style

    def children(self) -> list[TreeNode]:
        return list(self._children)

    def add_child(self, child: TreeNode) -> None:
        """Append a child node."""
        self._children.append(child)

    def __repr__(self) -> str:
        return (
            f"SimpleTreeNode(label={self._label!r}, icon={self._icon!r}, "
            f"style={self._style!r}, children={self._children!r})"
        )


class CompactListNode(TreeNode):
    """A leaf node whose items are listed inline after its label in compact mode."""

    def __init__(
        self,
        label: str = "",
        items: Iterable[str] = (),
        icon: str = "",
        style: str = "",
    ) -> None:
        self._label = label
        self._items = list(items)
        self._icon = icon
        self._style = style

    def label(self) -> str:
        return self._label

    def icon(self) -> str:
        return self._icon

    def style(self) -> str:
        return self._style

    def items(self) -> list[str]:
        """The inline items."""
        return list(self._items)

    def __repr__(self) -> str:
        return f"CompactListNode(label={self._label!r}, items={self._items!r})"


def _is_tree_like(obj: Any) -> bool:
    return callable(getattr(obj, "label", None)) and callable(getattr(obj, "children", None))


def _node_icon(node: Any) -> str:
    getter = getattr(node, "icon", None)
    return getter() if callable(getter) else ""


def _node_style(node: Any) -> str:
    getter = getattr(node, "style", None)
    return getter() if callable(getter) else ""


def _sgr_from_theme_value(value: Any) -> str | None:
    if not isinstance(value, str) or not value:
        return None
    if value.startswith("#") and len(value) == 7:
        try:
            r, g, b = (int(value[i:i + 2], 16) for i in (1, 3, 5))
        except ValueError:
            return None
        return f"38;2;{r};{g};{b}"
    if value.isdigit():
        return f"38;5;{value}"
    return None


@dataclass
class TreeFormatter:
    """Renders tree nodes as text using box-drawing connectors."""

    theme: Any = None
    no_color: bool = False
    options: TreeOptions | None = field(default_factory=default_tree_options)

    def __post_init__(self) -> None:
        if self.options is None:
            self.options = default_tree_options()

    def format_tree(self, node: Any, depth: int = 0, prefix: str = "", is_last: bool = True) -> str:
        """Render ``node`` and its descendants, one line per node."""
        if node is None:
            return ""
        opts = self.options
        if opts.max_depth >= 0 and depth > opts.max_depth:
            return ""

        parts: list[str] = []
        if depth > 0:
            parts.append(prefix + (opts.last_prefix if is_last else opts.branch_prefix))
        parts.append(self._node_text(node))

        if opts.compact and isinstance(node, CompactListNode):
            items = self.format_compact_list(node.items(), "")
            if items:
                parts.append(": " + items)
        parts.append("\n")

        if opts.collapsed_nodes and node.label() in opts.collapsed_nodes:
            return "".join(parts)

        child_prefix = ""
        if depth > 0:
            child_prefix = prefix + (opts.indent_prefix if is_last else opts.continue_prefix)
        children = list(node.children() or [])
        last_index = len(children) - 1
        for index, child in enumerate(children):
            parts.append(self.format_tree(child, depth + 1, child_prefix, index == last_index))
        return "".join(parts)

    def format_compact_list(self, items: Iterable[str], separator: str = "") -> str:
        """Join items with ``separator``, which defaults to ``", "``."""
        items = list(items)
        if not items:
            return ""
        return (separator or ", ").join(items)

    def format_tree_from_root(self, root: Any) -> str:
        """Render a whole tree starting at ``root``."""
        if root is None:
            return ""
        return self.format_tree(root, 0, "", True)

    def format_inline_tree(self, nodes: Iterable[Any], separator: str = "") -> str:
        """Render nodes on one line, joined by ``separator`` (default ``" → "``)."""
        nodes = list(nodes)
        if not nodes:
            return ""
        parts = []
        for node in nodes:
            text = node.label()
            icon = _node_icon(node)
            if self.options.show_icons and icon:
                text = f"{icon} {text}"
            style = _node_style(node)
            if style and not self.no_color:
                text = self._apply_tailwind_style(text, style)
            parts.append(text)
        return (separator or " → ").join(parts)

    def wrap_compact_list(self, items: Iterable[str], max_width: int, indent: str = "") -> str:
        """Lay items out comma-separated over lines no wider than ``max_width``."""
        items = list(items)
        if not items:
            return ""
        lines: list[str] = []
        current = indent
        base = len(indent)
        for item in items:
            if len(current) > base and len(current) + 2 + len(item) > max_width:
                lines.append(current)
                current = indent
            if len(current) > base:
                current += ", "
            current += item
        if len(current) > base:
            lines.append(current)
        return "\n".join(lines)

    def _node_text(self, node: Any) -> str:
        pretty = getattr(node, "pretty", None)
        if callable(pretty):
            text = pretty()
            if self.no_color:
                return str(text)
            ansi = getattr(text, "ansi", None)
            return ansi() if callable(ansi) else str(text)

        out = ""
        icon = _node_icon(node)
        if self.options.show_icons and icon:
            out = f"{icon} "
        label = node.label()
        style = _node_style(node)
        if style and not self.no_color:
            label = self._apply_tailwind_style(label, style)
        return out + label

    def _theme_color(self, name: str) -> str:
        value = getattr(self.theme, name, None) if self.theme is not None else None
        return _sgr_from_theme_value(value) or _DEFAULT_COLORS[name]

    def _apply_tailwind_style(self, text: str, style_str: str) -> str:
        foreground = ""
        attributes: list[str] = []
        for token in style_str.split():
            color = next((name for prefix, name in _COLOR_PREFIXES if token.startswith(prefix)), None)
            if color is not None:
                foreground = self._theme_color(color)
            elif token in _ATTRIBUTES and _ATTRIBUTES[token] not in attributes:
                attributes.append(_ATTRIBUTES[token])
        codes = attributes + ([foreground] if foreground else [])
        if not codes:
            return text
        return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


def _map_to_tree_node(mapping: Mapping[str, Any]) -> SimpleTreeNode:
    label = mapping.get("label")
    if not isinstance(label, str):
        name = mapping.get("name")
        label = name if isinstance(name, str) else ""
    icon = mapping.get("icon")
    style = mapping.get("style")
    children = mapping.get("children")
    child_nodes = [convert_to_tree_node(child) for child in children] if isinstance(children, list) else []
    metadata = {
        key: val
        for key, val in mapping.items()
        if key not in ("label", "name", "icon", "style", "children")
    }
    return SimpleTreeNode(
        label=label,
        icon=icon if isinstance(icon, str) else "",
        style=style if isinstance(style, str) else "",
        children=child_nodes,
        metadata=metadata,
    )


def convert_to_tree_node(value: Any) -> Any:
    """Return tree nodes as they are, turn mappings into nodes, and wrap anything else."""
    if isinstance(value, TreeNode) or _is_tree_like(value):
        return value
    if isinstance(value, Mapping):
        return _map_to_tree_node(value)
    return SimpleTreeNode(label=str(value))