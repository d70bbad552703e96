"""Terminal text styles: a colour theme, ANSI rendering and utility-class parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

_RESET = "\x1b[0m"

_BASIC_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

# Utility colour names that map onto semantic theme colours.
_THEME_COLORS = {
    "blue": "info",
    "green": "success",
    "red": "error",
    "yellow": "warning",
    "gray": "muted",
    "grey": "muted",
    "slate": "muted",
    "muted": "muted",
    "primary": "primary",
    "secondary": "secondary",
    "success": "success",
    "warning": "warning",
    "error": "error",
    "info": "info",
}

# Remaining utility colour names, approximated by basic terminal colours.
_PALETTE_COLORS = {
    "purple": "magenta",
    "violet": "magenta",
    "fuchsia": "magenta",
    "pink": "magenta",
    "indigo": "blue",
    "cyan": "cyan",
    "teal": "cyan",
    "sky": "cyan",
    "emerald": "green",
    "lime": "green",
    "orange": "yellow",
    "amber": "yellow",
    "rose": "red",
    "white": "white",
    "black": "black",
}

_TRANSFORMS = {"uppercase", "lowercase", "capitalize", "normal-case"}

_ARBITRARY = re.compile(r"^\[(#[0-9a-fA-F]{6})\]$")
_MAX_WIDTH = re.compile(r"^max-w-\[?(\d+)\]?$")


@dataclass
class Theme:
    """Semantic colours used when styling output."""

    primary: str = "#3B82F6"
    secondary: str = "#8B5CF6"
    success: str = "#22C55E"
    warning: str = "#EAB308"
    error: str = "#EF4444"
    info: str = "#0EA5E9"
    muted: str = "#6B7280"


def _color_codes(color: str, background: bool) -> str | None:
    """SGR parameters for a hex, 256-colour index or basic colour name."""
    if not color:
        return None
    if color.startswith("#") and len(color) == 7:
        try:
            r, g, b = (int(color[i:i + 2], 16) for i in (1, 3, 5))
        except ValueError:
            return None
        return f"{48 if background else 38};2;{r};{g};{b}"
    if color.isdigit() and int(color) <= 255:
        return f"{48 if background else 38};5;{int(color)}"
    base = _BASIC_COLORS.get(color.lower())
    if base is None:
        return None
    return str((40 if background else 30) + base)


def _capitalize(text: str) -> str:
    return re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), text)


@dataclass
class Style:
    """Visual attributes of a piece of text."""

    foreground: str = ""
    background: str = ""
    bold: bool = False
    faint: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    max_width: int = 0
    text_transform: str = ""

    def transform(self, text: str) -> str:
        """Apply the text transform and width limit, without colours."""
        if self.text_transform == "uppercase":
            text = text.upper()
        elif self.text_transform == "lowercase":
            text = text.lower()
        elif self.text_transform == "capitalize":
            text = _capitalize(text)
        if self.max_width > 0:
            text = "\n".join(line[: self.max_width] for line in text.split("\n"))
        return text

    def _codes(self) -> list[str]:
        codes = [
            code
            for flag, code in (
                (self.bold, "1"),
                (self.faint, "2"),
                (self.italic, "3"),
                (self.underline, "4"),
                (self.strikethrough, "9"),
            )
            if flag
        ]
        fg = _color_codes(self.foreground, background=False)
        if fg:
            codes.append(fg)
        bg = _color_codes(self.background, background=True)
        if bg:
            codes.append(bg)
        return codes

    def render(self, text: str) -> str:
        """Transform ``text`` and wrap each line in ANSI escape codes."""
        text = self.transform(text)
        codes = self._codes()
        if not codes or not text:
            return text
        start = f"\x1b[{';'.join(codes)}m"
        return "\n".join(f"{start}{line}{_RESET}" if line else line for line in text.split("\n"))


def _resolve_color(spec: str, theme: Theme) -> str | None:
    match = _ARBITRARY.match(spec)
    if match:
        return match.group(1)
    name = spec.split("-", 1)[0].lower()
    if name in _THEME_COLORS:
        return getattr(theme, _THEME_COLORS[name])
    return _PALETTE_COLORS.get(name)


def parse_style(style_str: str, theme: Theme | None = None) -> Style:
    """Build a Style from space-separated utility classes; unknown classes are ignored."""
    theme = theme or Theme()
    style = Style()
    for token in style_str.split():
        if token in ("bold", "font-bold", "font-semibold", "font-extrabold", "font-black"):
            style.bold = True
        elif token in ("font-light", "font-thin", "font-extralight", "faint"):
            style.faint = True
        elif token == "italic":
            style.italic = True
        elif token == "underline":
            style.underline = True
        elif token in ("line-through", "strikethrough"):
            style.strikethrough = True
        elif token in _TRANSFORMS:
            style.text_transform = "" if token == "normal-case" else token
        elif token.startswith("text-"):
            color = _resolve_color(token[len("text-"):], theme)
            if color is not None:
                style.foreground = color
        elif token.startswith("bg-"):
            color = _resolve_color(token[len("bg-"):], theme)
            if color is not None:
                style.background = color
        else:
            match = _MAX_WIDTH.match(token)
            if match:
                style.max_width = int(match.group(1))
    return style


def strip_ansi(text: str) -> str:
    """Remove escape sequences: everything from ESC up to and including ``m``."""
    out: list[str] = []
    in_escape = False
    for ch in text:
        if ch == "\x1b":
            in_escape = True
            continue
        if in_escape:
            if ch == "m":
                in_escape = False
            continue
        out.append(ch)
    return "".join(out)